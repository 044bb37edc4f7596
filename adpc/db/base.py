# adpc/db/base.py
from adpc.db.base_class import Base  # noqa: F401

# Importa todos los modelos que definen tablas para registrar la metadata
# (create_all en tests y autogenerate de Alembic)
from adpc.models import questionnaire  # noqa: F401
from adpc.models import submission  # noqa: F401
from adpc.models import user  # noqa: F401
from adpc.models import audit  # noqa: F401
