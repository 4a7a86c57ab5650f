"""Seed data script to populate initial test data."""
import asyncio
import uuid
from datetime import timedelta

from sqlalchemy import select

from app.core.database import async_session_maker, engine, Base, utcnow
from app.core.security import get_password_hash
from app.core.enums import UserRole, InventoryStatus
from app.models.user import User
from app.models.rack import Rack
from app.models.inventory import Inventory


RACK_IDENTIFIERS = ["A1", "B1", "C1", "D1"]
SLOTS_PER_RACK = 5


async def seed_data():
    """Seed initial data for testing."""
    async with async_session_maker() as session:
        # Check if data already exists
        result = await session.execute(select(User).limit(1))
        if result.scalar_one_or_none():
            print("Data already seeded. Skipping...")
            return

        users_data = [
            {
                "mobile": "9876543210",
                "password": "picker123",
                "name": "Demo Picker",
                "role": UserRole.PICKER,
                "device_id": "HHD-001",
            },
            {
                "mobile": "9123456780",
                "password": "supervisor123",
                "name": "Shift Supervisor",
                "role": UserRole.SUPERVISOR,
            },
        ]

        for user_data in users_data:
            password = user_data.pop("password")
            user = User(
                id=str(uuid.uuid4()),
                hashed_password=get_password_hash(password),
                **user_data
            )
            session.add(user)
            print(f"Created user: {user.mobile} (Role: {user.role.value})")

        for identifier in RACK_IDENTIFIERS:
            for slot in range(1, SLOTS_PER_RACK + 1):
                session.add(Rack(
                    rack_code=f"Rack-{identifier}-Slot{slot}",
                    rack_identifier=identifier,
                    slot_number=slot,
                    location=f"{identifier}-Slot{slot}",
                    zone=f"Zone {identifier[0]}",
                    is_available=True,
                ))
        print(f"Created {len(RACK_IDENTIFIERS) * SLOTS_PER_RACK} rack slots")

        now = utcnow()
        inventory_data = [
            {"sku": "SKU-MILK-1L", "bin_id": "BIN-A-01", "quantity": 12, "expiry_date": now + timedelta(days=4)},
            {"sku": "SKU-MILK-1L", "bin_id": "BIN-A-02", "quantity": 6, "expiry_date": now + timedelta(days=9)},
            {"sku": "SKU-BREAD", "bin_id": "BIN-B-01", "quantity": 20, "expiry_date": now + timedelta(days=2)},
            {"sku": "SKU-CHIPS", "bin_id": "BIN-C-01", "quantity": 40},
            {"sku": "SKU-CHIPS", "bin_id": "BIN-C-07", "quantity": 15},
            {"sku": "SKU-SOAP", "bin_id": "BIN-D-03", "quantity": 25},
        ]
        for row in inventory_data:
            session.add(Inventory(status=InventoryStatus.AVAILABLE, **row))
        print(f"Created {len(inventory_data)} inventory bins")

        await session.commit()
        print("\n✅ Seed data created successfully!")
        print("\n📝 Test Credentials:")
        print("   Picker:     9876543210 / picker123")
        print("   Supervisor: 9123456780 / supervisor123")


async def main():
    """Main entry point."""
    # Create tables if they don't exist (for local development)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await seed_data()


if __name__ == "__main__":
    asyncio.run(main())
