# create_lead_tables.py
import asyncio
import os
import sys

import asyncpg
from dotenv import load_dotenv

from safepsy_api.database.schema import lead_table_ddl

load_dotenv()


async def create_lead_tables():
    database_url = os.getenv('DATABASE_URL')
    if not database_url:
        print("❌ DATABASE_URL is not set")
        return False

    conn = await asyncpg.connect(database_url)

    try:
        print("Adding lead tables...")

        for statement in lead_table_ddl():
            await conn.execute(statement)
            print(f"✓ {statement.splitlines()[0]}")

        print("\n✅ Lead tables and indexes added successfully!")
        return True

    except Exception as e:
        print(f"❌ Error: {e}")
        return False
    finally:
        await conn.close()

if __name__ == "__main__":
    success = asyncio.run(create_lead_tables())
    sys.exit(0 if success else 1)
