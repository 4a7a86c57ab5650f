"""Enum definitions for the application."""
from enum import Enum


class BarcodeType(str, Enum):
    """Barcode symbologies reported by the device scanner."""
    QR = "qr"
    EAN13 = "ean13"
    EAN8 = "ean8"
    CODE128 = "code128"
    CODE39 = "code39"
    UPC = "upc"
    OTHER = "other"


class OrderStatus(str, Enum):
    """Order lifecycle states."""
    PENDING = "pending"
    RECEIVED = "received"
    BAG_SCANNED = "bag_scanned"
    PICKING = "picking"
    COMPLETED = "completed"
    PHOTO_VERIFIED = "photo_verified"
    RACK_ASSIGNED = "rack_assigned"
    HANDED_OFF = "handed_off"


class Zone(str, Enum):
    """Fulfillment zones."""
    A = "Zone A"
    B = "Zone B"
    C = "Zone C"
    D = "Zone D"


class ItemStatus(str, Enum):
    """Order item states, including the pick-issue outcomes."""
    PENDING = "pending"
    FOUND = "found"
    NOT_FOUND = "not_found"
    SCANNED = "scanned"
    COMPLETED = "completed"
    PICKED = "picked"
    SHORT = "short"
    ON_HOLD = "on_hold"
    REASSIGNED = "reassigned"


class ItemCategory(str, Enum):
    FRESH = "Fresh"
    SNACKS = "Snacks"
    GROCERY = "Grocery"
    CARE = "Care"


class BagStatus(str, Enum):
    """Pick bag states."""
    SCANNED = "scanned"
    IN_USE = "in_use"
    PHOTO_TAKEN = "photo_taken"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class UserRole(str, Enum):
    """User role options."""
    PICKER = "picker"
    SUPERVISOR = "supervisor"
    ADMIN = "admin"


class PickIssueType(str, Enum):
    """Problems a picker can report against a bin."""
    ITEM_DAMAGED = "ITEM_DAMAGED"
    ITEM_MISSING = "ITEM_MISSING"
    ITEM_EXPIRED = "ITEM_EXPIRED"
    WRONG_ITEM = "WRONG_ITEM"


class InventoryStatus(str, Enum):
    AVAILABLE = "available"
    DAMAGED = "damaged"
    EXPIRED = "expired"
    BLOCKED = "blocked"
    RESERVED = "reserved"


class PickNextAction(str, Enum):
    """What the picker should do after reporting an issue."""
    ALTERNATE_BIN = "ALTERNATE_BIN"
    SKIP_ITEM = "SKIP_ITEM"
