# adpc/core/errors.py
from __future__ import annotations

from typing import Any


class AppError(Exception):
    # Base de los errores de dominio del motor de puntuación.
    pass


class ValidationError(AppError):
    """
    Lote de respuestas inválido frente a la estructura del cuestionario.
    `kind` identifica el caso; `detail` lleva los ids ofensores.
    """

    def __init__(self, kind: str, detail: Any = None):
        self.kind = kind
        self.detail = detail
        super().__init__(kind if detail is None else f"{kind}: {detail}")

    def as_dict(self) -> dict[str, Any]:
        return {"error": self.kind, "detail": self.detail}


class NotFoundError(AppError):
    def __init__(self, resource: str, key: Any):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} not found: {key}")


class ProcessingError(AppError):
    # Falla de infraestructura (BD caída, conflicto, timeout). Reintentable completo.
    def __init__(self, cause: BaseException | str):
        self.cause = cause
        super().__init__(str(cause))
