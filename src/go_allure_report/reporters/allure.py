"""Allure/JUnit XML output for a parsed ``go test`` report.

Layout of the document (attribute order is part of the format):

    <testsuites>
        <testsuite tests="N" failures="N" time="S.SSS" name="...">
            <properties>
                <property name="go.version" value="..."></property>
                <property name="coverage.statements.pct" value="..."></property>
            </properties>
            <testcase classname="..." name="..." time="S.SSS">
                <skipped message="..."></skipped>
                <failure message="Failed" type="">...</failure>
            </testcase>
        </testsuite>
    </testsuites>
"""
from dataclasses import dataclass, field
from typing import BinaryIO, List, Union
import io, logging, re
import xml.etree.ElementTree as ET
from ..errors import ReportEncodingError
from ..models import Report, Result
from ..version import VersionProvider, go_runtime_version, resolve_go_version

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

log = logging.getLogger("go_allure_report")

# code points outside the XML 1.0 Char production
_INVALID_XML = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

@dataclass(frozen=True)
class AllureProperty:
    name: str
    value: str

@dataclass(frozen=True)
class AllureSkipMessage:
    message: str

@dataclass(frozen=True)
class AllureFailure:
    contents: str
    message: str = "Failed"
    type: str = ""

Outcome = Union[None, AllureSkipMessage, AllureFailure]

@dataclass(frozen=True)
class AllureTestCase:
    classname: str
    name: str
    time: str
    outcome: Outcome = None

@dataclass(frozen=True)
class AllureTestSuite:
    tests: int
    failures: int
    time: str
    name: str
    properties: List[AllureProperty] = field(default_factory=list)
    test_cases: List[AllureTestCase] = field(default_factory=list)

@dataclass(frozen=True)
class AllureTestSuites:
    suites: List[AllureTestSuite] = field(default_factory=list)

def format_time(ms: int) -> str:
    """Milliseconds as seconds with three decimals: 1234 -> '1.234'."""
    return f"{ms / 1000.0:.3f}"

def package_classname(name: str) -> str:
    """Last path segment of a package name: 'a/b/c' -> 'c'."""
    return name.rsplit("/", 1)[-1]

def build_suites(report: Report, go_version: str) -> AllureTestSuites:
    suites: List[AllureTestSuite] = []
    for pkg in report.packages:
        classname = package_classname(pkg.name)
        properties = [AllureProperty("go.version", go_version)]
        if pkg.coverage_pct != "":
            properties.append(AllureProperty("coverage.statements.pct", pkg.coverage_pct))

        failures = 0
        cases: List[AllureTestCase] = []
        for test in pkg.tests:
            outcome: Outcome = None
            if test.result is Result.FAIL:
                failures += 1
                outcome = AllureFailure(contents="\n".join(test.output))
            elif test.result is Result.SKIP:
                outcome = AllureSkipMessage("\n".join(test.output))
            cases.append(AllureTestCase(classname, test.name, format_time(test.time), outcome))

        suites.append(AllureTestSuite(tests=len(pkg.tests), failures=failures, time=format_time(pkg.time),
                                      name=pkg.name, properties=properties, test_cases=cases))
        log.debug("suite %s: %d tests, %d failures", pkg.name, len(cases), failures)
    return AllureTestSuites(suites)

def _clean(value: str) -> str:
    return _INVALID_XML.sub("\ufffd", value)

def to_element(doc: AllureTestSuites) -> ET.Element:
    root = ET.Element("testsuites")
    for s in doc.suites:
        ts = ET.SubElement(root, "testsuite")
        ts.set("tests", str(s.tests))
        ts.set("failures", str(s.failures))
        ts.set("time", _clean(s.time))
        ts.set("name", _clean(s.name))
        if s.properties:
            props = ET.SubElement(ts, "properties")
            for p in s.properties:
                prop = ET.SubElement(props, "property")
                prop.set("name", _clean(p.name))
                prop.set("value", _clean(p.value))
        for c in s.test_cases:
            tc = ET.SubElement(ts, "testcase")
            tc.set("classname", _clean(c.classname))
            tc.set("name", _clean(c.name))
            tc.set("time", _clean(c.time))
            if isinstance(c.outcome, AllureSkipMessage):
                ET.SubElement(tc, "skipped").set("message", _clean(c.outcome.message))
            elif isinstance(c.outcome, AllureFailure):
                failure = ET.SubElement(tc, "failure")
                failure.set("message", _clean(c.outcome.message))
                failure.set("type", _clean(c.outcome.type))
                failure.text = _clean(c.outcome.contents)
    return root

def render_document(doc: AllureTestSuites) -> str:
    """Serialize the tree, tab-indented, without declaration or trailing newline."""
    try:
        root = to_element(doc)
        ET.indent(root, space="\t")
        body = ET.tostring(root, encoding="unicode", short_empty_elements=False)
    except (TypeError, ValueError) as e:
        raise ReportEncodingError(f"cannot encode report as XML: {e}") from e
    # attribute values already carry &#13;, only text content holds a literal CR
    return body.replace("\r", "&#13;")

def allure_report_xml(report: Report, no_xml_header: bool, go_version: str, w: BinaryIO,
                      version_provider: VersionProvider = go_runtime_version) -> None:
    """Write the Allure XML representation of ``report`` to the binary stream ``w``.

    ``go_version`` overrides the value of the go.version property; when empty
    ``version_provider`` is asked once. Raises ReportEncodingError if the
    document cannot be built. Errors from ``w`` propagate unchanged.
    """
    version = resolve_go_version(go_version, version_provider)
    log.debug("go.version=%s, %d packages", version, len(report.packages))
    body = render_document(build_suites(report, version))

    if not no_xml_header:
        w.write(XML_HEADER.encode("utf-8"))
    w.write(body.encode("utf-8"))
    w.write(b"\n")
    w.flush()

class AllureReporter:
    def __init__(self, target: Union[str, BinaryIO], no_xml_header: bool = False, go_version: str = "",
                 version_provider: VersionProvider = go_runtime_version):
        self.target = target
        self.no_xml_header = no_xml_header
        self.go_version = go_version
        self.version_provider = version_provider

    def emit(self, report: Report) -> None:
        if isinstance(self.target, str):
            # render before truncating the file so a failed encode leaves it untouched
            body = io.BytesIO()
            allure_report_xml(report, self.no_xml_header, self.go_version, body, self.version_provider)
            with open(self.target, "wb") as f:
                f.write(body.getvalue())
            return
        allure_report_xml(report, self.no_xml_header, self.go_version, self.target, self.version_provider)
