"""
Email template rendering.

Templates are plain-text files in the templates/ directory next to this
module, using string.Template ``$placeholder`` syntax.
"""

from collections.abc import Mapping
from pathlib import Path
from string import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


def render_template(name: str, data: Mapping[str, str]) -> str:
    """
    Render a named template with data.

    Raises:
        FileNotFoundError: If no template with that name exists
        KeyError: If the template uses a placeholder missing from data
    """
    path = TEMPLATES_DIR / f"{name}.txt"
    return Template(path.read_text(encoding="utf-8")).substitute(data)
