"""Browsers a pull request can be opened in."""

from enum import Enum
from typing import Optional


class Browser(str, Enum):
    """Browser selection. Values are the display names."""
    SYSTEM_DEFAULT = "System Default"
    CHROME = "Google Chrome"
    SAFARI = "Safari"
    FIREFOX = "Firefox"
    ARC = "Arc"
    EDGE = "Microsoft Edge"

    @property
    def bundle_id(self) -> Optional[str]:
        """macOS bundle identifier, None for the system default."""
        return _BUNDLE_IDS.get(self)

    @property
    def controller_names(self) -> tuple:
        """Names to try with webbrowser.get(), most specific first."""
        return _CONTROLLER_NAMES.get(self, ())


_BUNDLE_IDS = {
    Browser.CHROME: "com.google.Chrome",
    Browser.SAFARI: "com.apple.Safari",
    Browser.FIREFOX: "org.mozilla.firefox",
    Browser.ARC: "company.thebrowser.Browser",
    Browser.EDGE: "com.microsoft.edgemac",
}

_CONTROLLER_NAMES = {
    Browser.CHROME: ("chrome", "google-chrome", "chromium"),
    Browser.SAFARI: ("safari",),
    Browser.FIREFOX: ("firefox",),
    Browser.ARC: ("arc",),
    Browser.EDGE: ("microsoft-edge", "edge"),
}
