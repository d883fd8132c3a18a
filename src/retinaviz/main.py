"""
Application Initialization
==========================
This module parses the command line, sets up logging and starts either the Qt
viewer or an off-screen render.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Resolves the scene preset and data directory.
2. Instantiates the Main Window (View) with that configuration.
3. Prevents circular import errors by being the orchestrator.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from retinaviz.config import DATA_PATH, PRESETS, SceneConfig
from retinaviz.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retinaviz",
        description="Interactive 3D view of retinal attribution maps and layer boundaries.",
    )
    parser.add_argument("--preset", choices=sorted(PRESETS), default="standard",
                        help="Scene variant (wireframe sampling, model set, label orientation).")
    parser.add_argument("--data-dir", default=DATA_PATH,
                        help="Directory containing attr.npy, layers.npy and the STL models.")
    parser.add_argument("--screenshot", metavar="PNG",
                        help="Render off-screen into this image instead of opening a window.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    parser.add_argument("--log-file", help="Also write the log to this file.")
    return parser


def render_screenshot(config: SceneConfig, path: str) -> None:
    """Compose the scene in an off-screen plotter and save one frame."""
    import pyvista as pv

    from retinaviz.scene.composer import SceneComposer

    plotter = pv.Plotter(off_screen=True)
    plotter.set_background(config.background)
    SceneComposer(config).compose(plotter)
    plotter.screenshot(path)
    plotter.close()
    logger.info(f"Screenshot saved to {path}")


def run_viewer(config: SceneConfig) -> int:
    from PySide6.QtWidgets import QApplication

    from retinaviz.view.main_window import MainWindow, VISIBLE_APP_NAME

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    window = MainWindow(config)
    window.show()
    window.start_loading()

    return app.exec()


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    config = PRESETS[args.preset].with_data_dir(os.path.abspath(args.data_dir))
    if not os.path.isdir(config.data_dir):
        logger.warning(f"Data directory not found at {config.data_dir}")

    if args.screenshot:
        render_screenshot(config, args.screenshot)
        return

    sys.exit(run_viewer(config))


if __name__ == "__main__":
    main()
