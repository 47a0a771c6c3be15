"""Image reference check: sibling images/ folder and existing files.

RULES:
- External images (with a URL scheme) are skipped
- The path must begin with "images/" (config.IMAGES_DIR)
- The file must exist relative to the referencing document
"""

from __future__ import annotations

from typing import List, Optional

from docs_directives.checks.base import BaseCheck, Issue, Severity
from docs_directives.config import IMAGES_DIR
from docs_directives.core.corpus import Corpus


class ImageCheck(BaseCheck):
    key = "images"
    name = "Images"
    description = "Images live in a sibling images/ folder and exist."

    def __init__(self, images_dir: Optional[str] = None) -> None:
        self.images_dir = (images_dir or IMAGES_DIR).strip("/")

    def check(self, corpus: Corpus) -> List[Issue]:
        issues: List[Issue] = []
        prefix = self.images_dir + "/"
        for doc in corpus:
            for image in doc.images:
                if image.is_external:
                    continue
                if not image.source.startswith(prefix):
                    issues.append(self.issue(
                        "image-location", Severity.ERROR, doc.path, image.line,
                        "Image '{}' must be referenced from the sibling '{}' folder".format(
                            image.source, prefix
                        ),
                    ))
                    continue
                resolved = corpus.resolve(doc, image.source)
                if resolved is None or not corpus.has_file(resolved):
                    issues.append(self.issue(
                        "missing-image", Severity.ERROR, doc.path, image.line,
                        "Image '{}' not found".format(image.source),
                    ))
        return issues
