import io
import pytest
from go_allure_report.models import Report
from go_allure_report.reporters.allure import allure_report_xml

GO_VERSION = "go1.22.0"

ROUND_TRIP_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    "<testsuites>\n"
    '\t<testsuite tests="2" failures="1" time="0.750" name="pkg/sub">\n'
    "\t\t<properties>\n"
    '\t\t\t<property name="go.version" value="go1.22.0"></property>\n'
    '\t\t\t<property name="coverage.statements.pct" value="87.5"></property>\n'
    "\t\t</properties>\n"
    '\t\t<testcase classname="sub" name="TestA" time="0.500"></testcase>\n'
    '\t\t<testcase classname="sub" name="TestB" time="0.250">\n'
    '\t\t\t<failure message="Failed" type="">assertion failed\n'
    "at line 5</failure>\n"
    "\t\t</testcase>\n"
    "\t</testsuite>\n"
    "</testsuites>\n"
)

@pytest.fixture
def round_trip_report() -> Report:
    return Report.model_validate({
        "packages": [{
            "name": "pkg/sub",
            "time": 750,
            "coverage_pct": "87.5",
            "tests": [
                {"name": "TestA", "time": 500, "result": "PASS"},
                {"name": "TestB", "time": 250, "result": "FAIL",
                 "output": ["assertion failed", "at line 5"]},
            ],
        }]
    })

@pytest.fixture
def mixed_report() -> Report:
    return Report.model_validate({
        "packages": [
            {"name": "github.com/acme/tool/parser", "time": 1234, "coverage_pct": "",
             "tests": [
                 {"name": "TestParse", "time": 10, "result": "PASS"},
                 {"name": "TestBroken", "time": 999, "result": "FAIL", "output": ["boom"]},
                 {"name": "TestSlow", "time": 0, "result": "SKIP", "output": ["skipping in short mode"]},
                 {"name": "TestAlsoBroken", "time": 1000, "result": "FAIL", "output": []},
             ]},
            {"name": "nodir", "time": 0, "tests": []},
            {"name": "a/b/c", "time": 5, "coverage_pct": "100.0",
             "tests": [{"name": "TestC", "time": 5, "result": "PASS"}]},
        ]
    })

@pytest.fixture
def encode():
    def _encode(report: Report, no_xml_header: bool = False, go_version: str = GO_VERSION, **kw) -> str:
        buf = io.BytesIO()
        allure_report_xml(report, no_xml_header, go_version, buf, **kw)
        return buf.getvalue().decode("utf-8")
    return _encode
