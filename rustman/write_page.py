"""Logic for persisting rendered documents as man page files."""

import gzip
from pathlib import Path

from rustman.document import Document
from rustman.roff import to_roff


def page_file_name(document: Document, *, compress: bool = True) -> str:
    """File name of a page, e.g. struct.mycrate::Item.3r.gz."""
    name = f"{document.page_name}.{document.manual_section}"
    return f"{name}.gz" if compress else name


def write_page(document: Document, out_dir: Path, *, compress: bool = True) -> Path:
    """Write a document under `out_dir` and return the file written."""
    target = out_dir / page_file_name(document, compress=compress)
    data = to_roff(document).encode("utf-8")
    if not compress:
        target.write_bytes(data)
        return target

    inner_name = page_file_name(document, compress=False)
    with (
        target.open("wb") as raw,
        gzip.GzipFile(filename=inner_name, mode="wb", fileobj=raw, mtime=0) as gz,
    ):
        gz.write(data)
    return target
