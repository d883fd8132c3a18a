import logging

from retinaviz.logging_config import VTK_LOGGER, route_vtk_output, setup_logging


def test_vtk_warnings_and_errors_reach_logger(caplog) -> None:
    window = route_vtk_output()

    with caplog.at_level(logging.WARNING, logger=VTK_LOGGER):
        window.DisplayWarningText("volume spacing is anisotropic")
        window.DisplayErrorText("cannot read Iris.stl")

    records = [r for r in caplog.records if r.name == VTK_LOGGER]
    assert [(r.levelno, r.getMessage()) for r in records] == [
        (logging.WARNING, "volume spacing is anisotropic"),
        (logging.ERROR, "cannot read Iris.stl"),
    ]


def test_setup_does_not_stack_handlers(tmp_path) -> None:
    log_file = tmp_path / "viewer.log"
    setup_logging(logging.DEBUG, str(log_file), capture_vtk=False)
    setup_logging(logging.DEBUG, str(log_file), capture_vtk=False)

    logger = logging.getLogger("retinaviz")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    assert "Logging initialized at level DEBUG." in log_file.read_text(encoding="utf-8")
