"""
Coverage validation tests against signature tables and go doc output
"""

from bindkit.core.config import BindKitConfig, ValidationConfig
from bindkit.introspection import parse_signature_table
from bindkit.validation import CoverageValidator, CoverageReport, parse_go_doc


EXPECTED = [
    "Page.EvaluateOnSelector",
    "Page.Goto",
    "Page.PDF",
    "Page.Close",
    "Page.Click",
    "Page.URL",
    "Page.WaitForTimeout",
    "BrowserContext.SetGeolocation",
    "BrowserContext.SetExtraHTTPHeaders",
    "BrowserContext.Route",
]


def test_expected_signatures_skip_ignored_and_restricted(tree):
    assert CoverageValidator().expected_signatures(tree) == EXPECTED


def test_full_table_passes(tree, table):
    report = CoverageValidator().validate(tree, table)

    assert report.ok
    assert report.checked == 10
    assert report.missing_ratio == 0.0


def test_superset_table_passes(tree, raw_signatures):
    raw_signatures["Page"]["Extra"] = ["", "error"]
    raw_signatures["Mouse"] = {"Click": ["x float64, y float64", "error"]}

    assert CoverageValidator().validate(tree, parse_signature_table(raw_signatures)).ok


def test_missing_methods_are_reported(tree, raw_signatures):
    del raw_signatures["Page"]["Goto"]
    del raw_signatures["BrowserContext"]

    report = CoverageValidator().validate(tree, parse_signature_table(raw_signatures))

    assert not report.ok
    assert report.missing == [
        "Page.Goto",
        "BrowserContext.SetGeolocation",
        "BrowserContext.SetExtraHTTPHeaders",
        "BrowserContext.Route",
    ]
    assert report.missing_ratio == 0.4
    assert report.format_checklist() == (
        "Missing API interface functions:\n"
        "- [ ] Page.Goto\n"
        "- [ ] BrowserContext.SetGeolocation\n"
        "- [ ] BrowserContext.SetExtraHTTPHeaders\n"
        "- [ ] BrowserContext.Route"
    )


def test_allowed_missing_is_configurable(tree, raw_signatures):
    del raw_signatures["Page"]["Goto"]
    config = BindKitConfig(validation=ValidationConfig(allowed_missing=["Page.Goto"]))

    report = CoverageValidator(config).validate(tree, parse_signature_table(raw_signatures))

    assert report.missing == ["Page.FrameByUrl"]
    assert report.checked == 10


def test_empty_report():
    report = CoverageReport()
    assert report.ok
    assert report.missing_ratio == 0.0
    assert report.format_checklist() == "Missing API interface functions:"


GO_DOC = """
package playwright // import "github.com/playwright-community/playwright-go"

func (p *pageImpl) Goto(url string, options ...PageGotoOptions) (Response, error)
func (p *pageImpl) EvaluateOnSelector(selector string, expression string) (interface{}, error)
func (p *pageImpl) PDF(options ...PagePDFOptions) ([]byte, error)
func (p *pageImpl) Close(options ...PageCloseOptions) error
func (p *pageImpl) Click(selector string, options ...PageClickOptions) error
func (p *pageImpl) URL() string
func (b *BrowserContext) SetGeolocation(gelocation *Geolocation) error
func (b *BrowserContext) Route(url interface{}, handler routeHandler) error
"""


def test_parse_go_doc():
    methods = parse_go_doc(GO_DOC)

    assert methods["pageImpl"] == methods["Page"]
    assert "goto" in methods["Page"]
    assert "evaluateonselector" in methods["Page"]
    assert methods["BrowserContext"] == {"setgeolocation", "route"}


def test_introspected_validation(tree, caplog):
    report = CoverageValidator().validate_introspected(tree, parse_go_doc(GO_DOC))

    assert report.checked == 10
    assert report.missing == ["Page.WaitForTimeout", "BrowserContext.SetExtraHTTPHeaders"]
    assert "Page.WaitForTimeout does not exist" in caplog.text
