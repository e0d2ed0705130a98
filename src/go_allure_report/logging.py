import logging
from rich.console import Console
from rich.logging import RichHandler

def setup_logging(level: str = "WARNING"):
    # stderr only: stdout may carry the XML document
    logging.basicConfig(level=level.upper(), format="%(message)s", datefmt="[%X]",
                        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)])
    return logging.getLogger("go_allure_report")
