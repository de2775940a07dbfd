"""
Interfaz común de las tools del explorador.

Una tool tiene nombre, descripción y un modelo Pydantic de argumentos.
``execute()`` nunca propaga excepciones: el resultado siempre es un
ToolResult, con ``success=False`` y el mensaje en ``error`` si algo falla.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class ToolResult(BaseModel):
    """Salida de una tool.

    Attributes:
        success: False si la tool falló (argumentos, archivo, patrón...)
        output: Texto para mostrar; vacío cuando success=False
        error: Mensaje legible del fallo, o None
    """

    success: bool
    output: str
    error: str | None = None

    model_config = {"extra": "forbid"}


class BaseTool(ABC):
    """Base abstracta de las tools.

    Las subclases fijan ``name``, ``description`` y ``args_model`` como
    atributos de clase e implementan ``execute()``.
    """

    name: str
    description: str
    args_model: type[BaseModel]

    @abstractmethod
    def execute(self, **kwargs: Any) -> ToolResult:
        """Ejecuta la tool con argumentos sin validar."""

    def validate_args(self, args: dict[str, Any]) -> BaseModel:
        """Instancia ``args_model``; lanza pydantic.ValidationError si no valida."""
        return self.args_model(**args)

    def get_schema(self) -> dict[str, Any]:
        """Descripción serializable de la tool: nombre, descripción e inputSchema."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.args_model.model_json_schema(),
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
