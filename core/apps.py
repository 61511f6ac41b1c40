import logging

from django.apps import AppConfig
from django.conf import settings


logger = logging.getLogger(__name__)


def _apply_sqlite_pragmas(sender, connection, **kwargs):
    if connection.vendor != "sqlite":
        return
    busy_timeout = int(getattr(settings, "SQLITE_BUSY_TIMEOUT_MS", 5000))
    try:
        with connection.cursor() as cursor:
            # WAL lets the PDF/export readers run while a conversion is writing.
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA synchronous=NORMAL;")
            cursor.execute(f"PRAGMA busy_timeout={busy_timeout};")
    except Exception:
        logger.warning("Could not apply SQLite pragmas", exc_info=True)


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "EximDesk core"

    def ready(self):
        from django.db.backends.signals import connection_created

        connection_created.connect(_apply_sqlite_pragmas, dispatch_uid="core.sqlite_pragmas")
