"""Sample accounts and cost centers for a fresh installation."""

from paytrack.database.base import Database
from paytrack.domain.entities import AccountType

SAMPLE_ACCOUNTS = [
    ("PayPal Business", AccountType.PAYPAL),
    ("Company Card", AccountType.CREDIT_CARD),
    ("Current Account", AccountType.BANK_ACCOUNT),
]

SAMPLE_COST_CENTERS = [
    ("IT", "Software"),
    ("IT", "Infrastructure"),
    ("Marketing", "Advertising"),
    ("Marketing", "Events"),
]


def load_sample_data(db: Database) -> tuple[int, int]:
    """Insert sample entities that are not already present.

    Returns:
        Tuple of (accounts created, cost centers created)
    """
    existing_accounts = {acc.name for acc in db.list_accounts()}
    existing_cost_centers = {(cc.category, cc.subcategory) for cc in db.list_cost_centers()}

    accounts_created = 0
    for name, account_type in SAMPLE_ACCOUNTS:
        if name not in existing_accounts:
            db.create_account(name=name, type=account_type)
            accounts_created += 1

    cost_centers_created = 0
    for category, subcategory in SAMPLE_COST_CENTERS:
        if (category, subcategory) not in existing_cost_centers:
            db.create_cost_center(category=category, subcategory=subcategory)
            cost_centers_created += 1

    return accounts_created, cost_centers_created
