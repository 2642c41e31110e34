"""Shared pytest fixtures for paytrack tests."""

import os
import tempfile
from datetime import datetime
from decimal import Decimal

import pytest

from paytrack.database.attachments import AttachmentStore
from paytrack.database.factories import create_memory_database, create_sqlite_database
from paytrack.domain.account import AccountService
from paytrack.domain.cost_center import CostCenterService
from paytrack.domain.entities import AccountType
from paytrack.domain.payment import PaymentService
from paytrack.domain.report import ReportService


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an empty in-memory database."""
    return create_memory_database()


@pytest.fixture(params=["sqlite", "memory"])
def db(request):
    """Run a test against every Database implementation."""
    if request.param == "sqlite":
        return request.getfixturevalue("temp_db")
    return request.getfixturevalue("memory_db")


@pytest.fixture
def uploads_dir(tmp_path):
    """Directory for stored attachments."""
    return tmp_path / "uploads"


@pytest.fixture
def attachments(uploads_dir):
    """Create an AttachmentStore in a temporary directory."""
    return AttachmentStore(uploads_dir)


@pytest.fixture
def account_service(db):
    return AccountService(db)


@pytest.fixture
def cost_center_service(db):
    return CostCenterService(db)


@pytest.fixture
def payment_service(db, attachments):
    """Create a PaymentService over the database and a temporary store."""
    return PaymentService(db, attachments)


@pytest.fixture
def report_service(db):
    return ReportService(db)


@pytest.fixture
def sample_account(db):
    """Create a sample account for testing."""
    return db.create_account(name="Company Card", type=AccountType.CREDIT_CARD)


@pytest.fixture
def sample_cost_center(db):
    """Create a sample cost center for testing."""
    return db.create_cost_center(category="IT", subcategory="Software")


@pytest.fixture
def sample_payment(db, sample_account, sample_cost_center):
    """Create a sample payment without attachments."""
    return db.create_payment(
        date=datetime(2024, 1, 15, 10, 30),
        amount=Decimal("99.99"),
        description="IDE license",
        account_id=sample_account.id,
        cost_center_id=sample_cost_center.id,
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, uploads_dir):
    """Global CLI options pointing at the temporary database and uploads directory."""
    return ["--db-path", temp_db.database_path, "--uploads-dir", str(uploads_dir)]
