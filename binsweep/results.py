"""
Results document: found bins rendered as a dt/dd list in an HTML page
"""
import re
from pathlib import Path
from typing import List, Optional, Tuple

import structlog
from lxml import html

logger = structlog.get_logger(__name__)

RESULTS_ID = "results"

# Characters lxml refuses in text nodes: C0 controls other than tab/LF/CR,
# lone surrogates and the two non-characters at the end of the BMP
XML_INCOMPATIBLE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe(value: Optional[str]) -> str:
    """Replace characters an XML text node cannot hold with U+FFFD."""
    return XML_INCOMPATIBLE.sub("\ufffd", value or '')


DEFAULT_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>myjson bins</title>
</head>
<body>
<dl id="results"></dl>
</body>
</html>
"""


class ResultsDocument:
    """An HTML page whose ``results`` element collects one dt/dd pair per found bin."""

    def __init__(self, document: html.HtmlElement = None):
        if document is None:
            document = html.document_fromstring(DEFAULT_PAGE)
        self.document = document

    @classmethod
    def from_file(cls, path) -> "ResultsDocument":
        """Load a hosting page from disk. It must contain an element with id ``results``."""
        return cls(html.parse(str(path)).getroot())

    @property
    def container(self) -> html.HtmlElement:
        # KeyError when the page has no results element
        return self.document.get_element_by_id(RESULTS_ID)

    def output_result(self, bin_id: Optional[str], contents: Optional[str]):
        """Append a label and a content element for one bin, in that order."""
        bin_element = html.Element("dt")
        contents_element = html.Element("dd")

        bin_element.text = xml_safe(bin_id)
        contents_element.text = xml_safe(contents)
        self.container.append(bin_element)
        self.container.append(contents_element)

    @property
    def entries(self) -> List[Tuple[str, str]]:
        """Each dt paired with the first dd after it; comments and other children are skipped."""
        pairs = []
        label = None
        for child in self.container:
            if child.tag == "dt":
                label = child.text_content()
            elif child.tag == "dd" and label is not None:
                pairs.append((label, child.text_content()))
                label = None
        return pairs

    def __len__(self) -> int:
        return len(self.entries)

    def render(self) -> str:
        return html.tostring(
            self.document,
            pretty_print=True,
            doctype="<!DOCTYPE html>",
            encoding="unicode"
        )

    def save(self, path) -> Path:
        path = Path(path)
        path.write_text(self.render(), encoding="utf-8")
        logger.info("results_saved", path=str(path), entries=len(self))
        return path
