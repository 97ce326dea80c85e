"""Map shell adapters.

- base: abstract MapShell contract the session talks to
- style: StyleDocumentShell, materialises operations into a MapLibre style
"""

from sahara_map.shell.base import MapShell
from sahara_map.shell.style import StyleDocumentShell

__all__ = ["MapShell", "StyleDocumentShell"]
