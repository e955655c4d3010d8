"""
Seed the default chart of accounts.

Creates the account codes the ledger posting service posts to, either for one
tenant or, without --tenant-id, as shared defaults visible to every tenant.

    python scripts/seed_chart_of_accounts.py --tenant-id acme
"""
import sys
import os
import argparse
import logging
from dotenv import load_dotenv

load_dotenv()

# Add the parent directory to sys.path to allow imports from backend
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Base, SessionLocal, engine
import models  # noqa: F401
from crud.chart_of_accounts import initialize_default_accounts

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger("seed_chart_of_accounts")


def seed(tenant_id=None):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = initialize_default_accounts(db, tenant_id, user_id="seed-script")
        logger.info(f"Created {len(created)} account(s) for {tenant_id or 'shared defaults'}")
        return created
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Seed the default chart of accounts")
    parser.add_argument("--tenant-id", type=str, default=None, help="Tenant to seed; omit for shared accounts")
    args = parser.parse_args()
    seed(args.tenant_id)


if __name__ == "__main__":
    main()
