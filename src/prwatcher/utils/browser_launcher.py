"""Opening pull request URLs in the selected browser."""

import logging
import webbrowser
from typing import Optional

from prwatcher.models.browser import Browser


logger = logging.getLogger(__name__)


def _find_controller(browser: Optional[Browser]) -> Optional[webbrowser.BaseBrowser]:
    if browser is None or browser == Browser.SYSTEM_DEFAULT:
        return None
    for name in browser.controller_names:
        try:
            return webbrowser.get(name)
        except webbrowser.Error:
            continue
    logger.info(f"{browser.value} is not available, using the system default browser")
    return None


def open_url(url: str, browser: Optional[Browser] = None) -> bool:
    """
    Open a URL in the selected browser.

    Falls back to the system default browser when no browser is selected or
    the selected one cannot be found.

    Args:
        url: URL to open
        browser: Browser selection, None for the system default

    Returns:
        True if a browser accepted the URL
    """
    controller = _find_controller(browser)
    if controller is not None:
        return controller.open(url)
    return webbrowser.open(url)
