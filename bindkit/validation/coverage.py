"""
BindKit Coverage Validation

Diffs the methods the API description documents against the Go surface: the
hand-maintained signature table, or method names introspected from
`go doc -all -short` output. Missing methods are reported as data, never
raised.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from bindkit.core.config import BindKitConfig
from bindkit.core.naming import NameTransformer
from bindkit.core.schema import DescriptionTree, SignatureTable


logger = logging.getLogger(__name__)

CHECKLIST_HEADER = "Missing API interface functions:"

_GO_DOC_METHOD = re.compile(r"func \(\w+ \*(\w+)\) (\w+)\(")


@dataclass
class CoverageReport:
    """Outcome of a coverage check."""
    missing: List[str] = field(default_factory=list)   # "Class.Method" signatures
    checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.missing

    @property
    def missing_ratio(self) -> float:
        return len(self.missing) / self.checked if self.checked else 0.0

    def format_checklist(self) -> str:
        """Markdown checklist of the missing signatures."""
        lines = [CHECKLIST_HEADER]
        lines.extend(f"- [ ] {signature}" for signature in self.missing)
        return "\n".join(lines)


class CoverageValidator:
    """Computes the expected Go method set and checks it against a surface."""

    def __init__(self, config: Optional[BindKitConfig] = None, transformer: Optional[NameTransformer] = None):
        self.config = config or BindKitConfig()
        self.transformer = transformer or NameTransformer(self.config.selector_style)

    def expected_signatures(self, tree: DescriptionTree) -> List[str]:
        """
        Documented methods the Go binding must expose, as "Class.Method".

        Skips ignored classes, engine-specific classes, members restricted to
        other languages and signatures that are allowed to be missing.
        """
        validation = self.config.validation
        signatures = []

        for api_class in tree.classes:
            if validation.is_ignored_class(api_class.name):
                continue
            for member in api_class.methods():
                if not member.langs.applies_to(self.config.target_language):
                    continue
                go_name = self.transformer.transform(member.name_for(self.config.target_language))
                signature = f"{api_class.name}.{go_name}"
                if signature in validation.allowed_missing:
                    continue
                signatures.append(signature)

        return signatures

    def validate(self, tree: DescriptionTree, table: SignatureTable) -> CoverageReport:
        """Check every expected signature against the signature table."""
        report = CoverageReport()
        for signature in self.expected_signatures(tree):
            class_name, method_name = signature.split(".", 1)
            report.checked += 1
            if not table.has_member(class_name, method_name):
                report.missing.append(signature)

        logger.info(f"Coverage: {report.checked - len(report.missing)}/{report.checked} documented methods declared")
        return report

    def validate_introspected(self, tree: DescriptionTree, methods: Dict[str, Set[str]]) -> CoverageReport:
        """
        Check every expected signature against introspected Go methods.

        Args:
            tree: API description
            methods: Receiver type -> lower-cased method names, see `parse_go_doc`
        """
        report = CoverageReport()
        for signature in self.expected_signatures(tree):
            class_name, method_name = signature.split(".", 1)
            report.checked += 1
            if method_name.lower() not in methods.get(class_name, set()):
                logger.warning(f"{signature} does not exist")
                report.missing.append(signature)

        logger.info(f"Coverage: {report.missing_ratio * 100:.1f}% of documented methods are missing")
        return report


def parse_go_doc(text: str) -> Dict[str, Set[str]]:
    """
    Extract methods from `go doc -all -short` output.

    Receivers named `<name>Impl` are also recorded under the interface name,
    so `func (p *pageImpl) Goto(` counts for both "pageImpl" and "Page".
    """
    methods: Dict[str, Set[str]] = {}
    for receiver, method in _GO_DOC_METHOD.findall(text):
        names = {receiver}
        if receiver.endswith("Impl"):
            base = receiver[:-len("Impl")]
            names.add(base[:1].upper() + base[1:])
        for name in names:
            methods.setdefault(name, set()).add(method.lower())
    return methods
