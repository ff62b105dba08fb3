"""
Main entry point for depmap.

Usage:
    python -m depmap_app [WORKSPACE]
    python -m depmap_app WORKSPACE --dump-json
    depmap  (if installed)
"""

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from datetime import datetime

logger = logging.getLogger("depmap_app")


def setup_exception_hook(log_file: Path):
    """Setup global exception hook to catch Qt exceptions."""

    def exception_hook(exctype, value, tb):
        error_msg = ''.join(traceback.format_exception(exctype, value, tb))
        try:
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(f"\n{'='*60}\n")
                f.write(f"UNHANDLED EXCEPTION at {datetime.now()}\n")
                f.write(f"{'='*60}\n")
                f.write(error_msg)
                f.write("\n")
        except OSError:
            pass

        logger.critical("Unhandled exception (details in %s)\n%s", log_file, error_msg)

        # Call default handler
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = exception_hook


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depmap",
        description="Interactive map of a codebase's import dependencies.",
    )
    parser.add_argument("workspace", nargs="?", help="Workspace root to map")
    parser.add_argument("--config", type=Path, help="Path to a depmap.config.json")
    parser.add_argument(
        "--dump-json", action="store_true",
        help="Print the {nodes, edges} graph as JSON and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def dump_json(workspace: str, config_path) -> int:
    """Build headlessly and print the graph."""
    from depmap_core.adapters.local_fs import LocalFS
    from depmap_core.config import load_config
    from depmap_core.services.graph_builder import GraphBuilder

    config = load_config(config_path, workspace_root=Path(workspace))
    try:
        graph = GraphBuilder(LocalFS(), config).build(workspace)
    except NotADirectoryError as e:
        logger.error("%s", e)
        return 2

    json.dump(graph.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def main(argv=None):
    """Launch depmap."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.dump_json:
        if not args.workspace:
            logger.error("--dump-json needs a workspace path")
            return 2
        return dump_json(args.workspace, args.config)

    setup_exception_hook(Path.cwd() / "crash_log.txt")

    from PyQt6.QtWidgets import QApplication
    from PyQt6.QtCore import Qt

    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")
    app.setApplicationName("depmap")

    from depmap_app.resources.styles import DARK_STYLESHEET
    app.setStyleSheet(DARK_STYLESHEET)

    from depmap_core.config import load_config
    from depmap_app.views.main_window import MainWindow

    config = load_config(args.config) if args.config else None
    window = MainWindow(root=args.workspace, config=config)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
