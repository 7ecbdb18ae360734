from flask import Blueprint, render_template, request

from .. import notifications
from ..web import confirmed, current_workflow, posted_row
from ..workflows import CustomerWorkflow, EntityWorkflow, TableWorkflow, TimeSlotWorkflow


def entity_blueprint(name: str, workflow_cls: type[EntityWorkflow], heading: str, columns, inputs) -> Blueprint:
    """Add/edit/delete page for one collection.

    `columns` are (header, key) pairs for the listing; `inputs` describe the
    form fields as dicts with name, label, type and optional min/placeholder.
    """
    bp = Blueprint(name, __name__)

    def workflow() -> EntityWorkflow:
        return current_workflow(name, workflow_cls)

    def render(wf: EntityWorkflow):
        return render_template(
            "entities.html",
            wf=wf,
            heading=heading,
            columns=columns,
            inputs=inputs,
        )

    def row_item(wf: EntityWorkflow):
        item = posted_row(wf.items)
        if item is None:
            wf.notify(notifications.error(f"That {wf.label} is no longer listed"))
        return item

    @bp.get("")
    def index():
        wf = workflow()
        wf.load()
        return render(wf)

    @bp.post("")
    def submit():
        wf = workflow()
        wf.submit(request.form)
        return render(wf)

    @bp.post("/edit")
    def edit():
        wf = workflow()
        item = row_item(wf)
        if item is not None:
            wf.enter_edit(item)
        return render(wf)

    @bp.post("/cancel")
    def cancel():
        wf = workflow()
        wf.cancel_edit()
        return render(wf)

    @bp.post("/delete")
    def delete():
        wf = workflow()
        item = row_item(wf)
        if item is not None:
            wf.delete(item, confirmed)
        return render(wf)

    return bp


customers_bp = entity_blueprint(
    "customers",
    CustomerWorkflow,
    "Customers",
    columns=[("Name", "name"), ("Phone", "phoneNumber"), ("Email", "email")],
    inputs=[
        {"name": "name", "label": "Name", "type": "text"},
        {"name": "phoneNumber", "label": "Phone Number", "type": "text"},
        {"name": "email", "label": "Email", "type": "email"},
    ],
)

tables_bp = entity_blueprint(
    "tables",
    TableWorkflow,
    "Tables",
    columns=[("Table Number", "tableNumber"), ("Seats", "numberOfSeats")],
    inputs=[
        {"name": "tableNumber", "label": "Table Number", "type": "text"},
        {"name": "numberOfSeats", "label": "Number of Seats", "type": "number", "min": 1},
    ],
)

slots_bp = entity_blueprint(
    "slots",
    TimeSlotWorkflow,
    "Time Slots",
    columns=[("Slot ID", "slotId"), ("Time", "time")],
    inputs=[
        {"name": "slotId", "label": "Slot ID", "type": "text", "placeholder": "A unique identifier"},
        {"name": "time", "label": "Time", "type": "text", "placeholder": "18:30 or 6:30 PM"},
    ],
)
