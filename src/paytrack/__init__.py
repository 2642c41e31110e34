# The domain package must initialise before the database layer, whose
# modules import domain entities while the services import the database.
from paytrack import domain  # noqa: F401


# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from paytrack.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
