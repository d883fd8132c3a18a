"""
Logging Configuration
=====================
Sets up the 'retinaviz' logger and pulls VTK's own diagnostics into it.

VTK reports problems (bad volume spacing, OpenGL context trouble, unreadable
STL files) through its global vtkOutputWindow, which writes straight to
stderr. The relay below replaces that window so those messages arrive as
records on the 'retinaviz.vtk' logger, with the same handlers and format as
the rest of the viewer.
"""
import logging
import sys
from typing import Optional

from vtkmodules.util.misc import calldata_type
from vtkmodules.util.vtkConstants import VTK_STRING
from vtkmodules.vtkCommonCore import vtkOutputWindow, vtkStringOutputWindow

APP_LOGGER = "retinaviz"
VTK_LOGGER = f"{APP_LOGGER}.vtk"


class VtkMessageRelay:
    """Forwards vtkOutputWindow error/warning events to a Python logger."""

    def __init__(self, logger_name: str = VTK_LOGGER) -> None:
        self.logger = logging.getLogger(logger_name)

    @calldata_type(VTK_STRING)
    def __call__(self, caller, event: str, message: str) -> None:
        text = (message or "").strip()
        if event == "ErrorEvent":
            self.logger.error(text)
        else:
            self.logger.warning(text)


def route_vtk_output(logger_name: str = VTK_LOGGER) -> vtkStringOutputWindow:
    """
    Install a vtkStringOutputWindow as VTK's global output window and relay
    its error and warning events to `logger_name`.

    Returns:
        The installed window.
    """
    window = vtkStringOutputWindow()
    relay = VtkMessageRelay(logger_name)
    window.AddObserver("ErrorEvent", relay)
    window.AddObserver("WarningEvent", relay)
    vtkOutputWindow.SetInstance(window)
    return window


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None,
                  capture_vtk: bool = True) -> None:
    """
    Configures the 'retinaviz' logger namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG for --debug).
        log_file: Optional path to save logs to a file.
        capture_vtk: Route VTK warnings and errors into 'retinaviz.vtk'.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level)

    # Re-running setup (e.g. from tests) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if capture_vtk:
        route_vtk_output()
        logger.debug("VTK output routed to the retinaviz.vtk logger.")

    logger.info(f"Logging initialized at level {logging.getLevelName(level)}.")
