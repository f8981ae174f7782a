"""
Native file-selection dialog for choosing an image.

Shells out to whatever the platform provides: ``osascript`` on macOS,
PowerShell's OpenFileDialog on Windows, ``zenity`` or ``kdialog`` on Linux.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from pokidex.config.logging import get_logger

logger = get_logger(__name__)

DIALOG_TITLE = "Select a Pokémon image"
IMAGE_PATTERNS = "*.png *.jpg *.jpeg *.webp *.gif"

_MACOS_SCRIPT = f"""
set selectedFile to choose file with prompt "{DIALOG_TITLE}" of type {{"public.image"}}
POSIX path of selectedFile
"""

_WINDOWS_SCRIPT = f"""
Add-Type -AssemblyName System.Windows.Forms
$dialog = New-Object System.Windows.Forms.OpenFileDialog
$dialog.Filter = "Image files (*.png;*.jpg;*.jpeg;*.webp;*.gif)|*.png;*.jpg;*.jpeg;*.webp;*.gif|All files (*.*)|*.*"
$dialog.Title = "{DIALOG_TITLE}"
if ($dialog.ShowDialog() -eq [System.Windows.Forms.DialogResult]::OK) {{
  Write-Output $dialog.FileName
}}
"""

_LINUX_DIALOGS = [
    [
        "zenity",
        "--file-selection",
        f"--title={DIALOG_TITLE}",
        f"--file-filter=Image files | {IMAGE_PATTERNS}",
    ],
    [
        "kdialog",
        "--getopenfilename",
        ".",
        f"{IMAGE_PATTERNS}|Image files",
        "--title",
        DIALOG_TITLE,
    ],
]


class FilePickerError(RuntimeError):
    """No file was chosen, or no dialog could be shown."""


def _run_dialog(command: list[str]) -> str | None:
    """Run a dialog command; return stripped stdout, or None if it can't run or was cancelled."""
    try:
        result = subprocess.run(command, capture_output=True, text=True)
    except OSError as e:
        logger.debug(f"Could not launch {command[0]}: {e}")
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def pick_image_file(platform: str | None = None) -> Path:
    """
    Open the platform's file chooser and return the selected image path.

    Args:
        platform: Override for ``sys.platform`` (used by tests)

    Raises:
        FilePickerError: If the dialog was cancelled or is unavailable
    """
    platform = platform or sys.platform

    if platform == "darwin":
        selected = _run_dialog(["osascript", "-e", _MACOS_SCRIPT])
        if selected is None:
            raise FilePickerError("Image selection was cancelled or failed on macOS")
        return Path(selected)

    if platform.startswith("win"):
        selected = _run_dialog(["powershell", "-NoProfile", "-Command", _WINDOWS_SCRIPT])
        if selected is None:
            raise FilePickerError("Image selection was cancelled or failed on Windows")
        return Path(selected)

    if platform.startswith("linux"):
        for command in _LINUX_DIALOGS:
            selected = _run_dialog(command)
            if selected is not None:
                return Path(selected)
        raise FilePickerError(
            "Could not open a file chooser on Linux. Install 'zenity' or 'kdialog', "
            "or use: pokidex identify-image <path>"
        )

    raise FilePickerError(
        "Interactive file picker is not supported on this platform. "
        "Use: pokidex identify-image <path>"
    )
