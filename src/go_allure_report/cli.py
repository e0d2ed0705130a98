from typing import Optional
import typer
import yaml
from pydantic import ValidationError
from .config import load_config, FormatterConfig
from .errors import ReportEncodingError
from .logging import setup_logging
from .models import load_report
from .reporters.allure import AllureReporter
from .reporters.console import ConsoleReporter

app = typer.Typer(add_completion=False, help="Convert a parsed go test report into Allure XML")

@app.command()
def convert(
    input: str = typer.Argument("-", help="Parsed report (YAML or JSON); '-' reads stdin"),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Write XML to this path instead of stdout"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    no_xml_header: bool = typer.Option(False, "--no-xml-header", help="Do not print the xml header"),
    go_version: str = typer.Option("", "--go-version", help="Specify the value to use for the go.version property"),
    summary: bool = typer.Option(False, "--summary", help="Print per-package counts to stderr"),
    set_exit_code: bool = typer.Option(False, "--set-exit-code", help="Exit 1 if any test failed"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ..."),
):
    try:
        cfg: FormatterConfig = load_config(config) if config else FormatterConfig()
        if log_level:
            cfg = FormatterConfig.model_validate({**cfg.model_dump(), "log_level": log_level})
    except (OSError, yaml.YAMLError, ValidationError) as e:
        typer.echo(f"Error reading config: {e}", err=True)
        raise typer.Exit(code=1)
    log = setup_logging(cfg.log_level)

    try:
        report = load_report(input)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        log.debug("load failed", exc_info=True)
        typer.echo(f"Error reading report {input!r}: {e}", err=True)
        raise typer.Exit(code=1)

    target = out if out else typer.get_binary_stream("stdout")
    reporter = AllureReporter(target, no_xml_header=no_xml_header or cfg.no_xml_header,
                              go_version=go_version or cfg.go_version)
    try:
        reporter.emit(report)
    except (ReportEncodingError, OSError) as e:
        typer.echo(f"Error writing XML: {e}", err=True)
        raise typer.Exit(code=1)

    if summary:
        ConsoleReporter().emit(report)
    raise typer.Exit(code=1 if set_exit_code and report.failures() else 0)

def main():
    app()

if __name__ == "__main__":
    main()
