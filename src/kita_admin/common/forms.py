"""Form-action plumbing shared by the admin controllers.

Every admin page posts to ``<page>/<action>``; the handler runs the use case
and the browser is sent back to the page with a flash message.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from flask import abort, flash, redirect, request, url_for

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

FormAction = Callable[[Mapping[str, str]], str]


def run_action(actions: Mapping[str, FormAction], action: str, *, back_to: str, **back_args):
    """Run ``actions[action]`` with the posted form and redirect to ``back_to``.

    The handler returns the success message. Domain errors are flashed as-is;
    anything else is logged with its traceback and left to Flask's 500 handling.
    """
    handler = actions.get(action)
    if handler is None:
        abort(404)

    try:
        flash(handler(request.form), "success")
    except DomainError as e:
        flash(str(e), "danger")
    except Exception:
        logger.exception("Form action %s on %s failed", action, back_to)
        raise

    return redirect(url_for(back_to, **back_args))
