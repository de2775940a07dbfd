"""
Validadores de paths para las operaciones sobre un archivo concreto.

Resuelven el path pedido por el caller contra la raíz del workspace y
garantizan que el resultado no escapa de ella.
"""

import os
from pathlib import Path

from .errors import NotAFileError, NotFoundError, PathTraversalError


def validate_path(path: str, workspace_root: Path) -> Path:
    """Valida y resuelve un path, asegurando que esté dentro del workspace.

    Args:
        path: Path relativo proporcionado por el caller
        workspace_root: Directorio raíz del workspace

    Returns:
        Path absoluto y resuelto, garantizado dentro del workspace

    Raises:
        PathTraversalError: Si el path resuelto escapa del workspace
        NotFoundError: Si el path no se puede resolver

    Example:
        >>> validate_path("src/main.py", Path("/workspace"))
        Path("/workspace/src/main.py")
    """
    workspace_resolved = workspace_root.resolve()

    # resolve() elimina '..' y '.' y sigue symlinks
    try:
        full_path = (workspace_resolved / path).resolve()
    except (ValueError, OSError) as e:
        raise NotFoundError(path) from e

    if not full_path.is_relative_to(workspace_resolved):
        raise PathTraversalError(path, str(full_path), str(workspace_resolved))

    return full_path


def validate_file_exists(path: Path, display_path: str) -> None:
    """Valida que un path exista y sea un archivo regular.

    Args:
        path: Path absoluto del archivo
        display_path: Path tal y como lo pidió el caller (para el mensaje)

    Raises:
        NotFoundError: Si el path no existe
        NotAFileError: Si el path es un directorio
    """
    if not path.exists():
        raise NotFoundError(display_path)

    if path.is_dir():
        raise NotAFileError(display_path)


def index_key(path: str, workspace_root: Path) -> str:
    """Clave del índice para el path pedido, sin seguir symlinks.

    El builder indexa un symlink con su propio nombre, así que la clave
    sale del path normalizado (sin resolver). La contención del destino
    ya la comprobó ``validate_path``; aquí se comprueba la del nombre.

    Raises:
        PathTraversalError: Si el path normalizado escapa del workspace
    """
    workspace_resolved = workspace_root.resolve()
    lexical = Path(os.path.normpath(workspace_resolved / path))
    if not lexical.is_relative_to(workspace_resolved):
        raise PathTraversalError(path, str(lexical), str(workspace_resolved))
    return lexical.relative_to(workspace_resolved).as_posix()
