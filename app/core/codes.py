"""Parsers for the QR labels printed on bags and rack slots."""
import re
from typing import NamedTuple, Optional

from app.core.exceptions import BadRequestError


class BagCode(NamedTuple):
    bag_id: str            # "BAG-001"
    size: Optional[str]    # "25L"
    code: Optional[str]    # "XYZ123"


class RackCode(NamedTuple):
    rack_identifier: str   # "D1"
    slot_number: int
    rider_name: str
    rack_code: str         # "Rack-D1-Slot3"


RACK_QR_PATTERN = re.compile(r"^Rack-([A-Z0-9]+)-Slot(\d+)\s*\(([^)]+)\)$", re.IGNORECASE)


def parse_bag_qr(qr_code: str) -> BagCode:
    """Split ``BAG-{number}-{size}-{code}``; size and code are optional."""
    parts = qr_code.strip().split("-")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise BadRequestError(
            "Invalid bag QR code format. Expected: BAG-{number}-{size}-{code}"
        )

    bag_id = f"{parts[0]}-{parts[1]}"
    size = None
    code = None
    if len(parts) >= 3 and parts[2]:
        size = parts[2]
    if len(parts) >= 4:
        # The trailing code may itself contain dashes
        code = "-".join(parts[3:]) or None
    return BagCode(bag_id=bag_id, size=size, code=code)


def parse_rack_qr(qr_code: str) -> RackCode:
    """Parse ``Rack-{identifier}-Slot{number} ({rider name})``. The rider name is required."""
    match = RACK_QR_PATTERN.match(qr_code.strip())
    if not match:
        raise BadRequestError(
            "Invalid rack QR code format. Expected format: "
            "Rack-{identifier}-Slot{number} ({rider name}). Example: Rack-D1-Slot3 (John Doe)"
        )

    rack_identifier = match.group(1).upper()
    slot_number = int(match.group(2))
    rider_name = match.group(3).strip()

    if slot_number < 1:
        raise BadRequestError("Invalid slot number in QR code")
    if not rider_name:
        raise BadRequestError("Rider name is required in QR code format")

    return RackCode(
        rack_identifier=rack_identifier,
        slot_number=slot_number,
        rider_name=rider_name,
        rack_code=f"Rack-{rack_identifier}-Slot{slot_number}",
    )
