from rich.console import Console
from rich.markup import escape
from ..models import Report, Result

class ConsoleReporter:
    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def emit(self, report: Report) -> None:
        total = {r: 0 for r in Result}
        for pkg in report.packages:
            counts = {r: sum(1 for t in pkg.tests if t.result is r) for r in Result}
            for r, n in counts.items(): total[r] += n
            style = "red" if counts[Result.FAIL] else "green"
            cov = f" coverage {pkg.coverage_pct}%" if pkg.coverage_pct else ""
            self.console.print(f"[{style}]{escape(pkg.name)}[/]: {counts[Result.PASS]} passed, "
                               f"{counts[Result.FAIL]} failed, {counts[Result.SKIP]} skipped{cov}")
        self.console.print(f"Total: {total[Result.PASS]} passed, {total[Result.FAIL]} failed, "
                           f"{total[Result.SKIP]} skipped.")
