"""SQLAlchemy models."""
from app.models.user import User
from app.models.scanned_item import ScannedItem
from app.models.order import Order
from app.models.completed_order import CompletedOrder
from app.models.item import Item
from app.models.bag import Bag
from app.models.rack import Rack
from app.models.inventory import Inventory
from app.models.pick_issue import PickIssue, Task

__all__ = [
    "User", "ScannedItem", "Order", "CompletedOrder", "Item",
    "Bag", "Rack", "Inventory", "PickIssue", "Task",
]
