"""
Default template renderer for PatchElements events.

Any callable taking ``(template_name, context)`` and returning HTML can be
used instead; see ``DATASTAR_CONFIG["template_renderer"]``.
"""

import logging
from typing import Any, Callable, Dict

from django.template.loader import render_to_string

logger = logging.getLogger(__name__)

TemplateRenderer = Callable[[str, Dict[str, Any]], str]


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    """Render ``template_name`` with Django's configured template engines."""
    logger.debug("Rendering %s", template_name)
    return render_to_string(template_name, context)
