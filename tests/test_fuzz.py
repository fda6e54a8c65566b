from __future__ import annotations

import os

import pytest

from adoc_reflow.classifier import classify_line
from adoc_reflow.models import LineKind
from adoc_reflow.reflow import reflow

atheris = pytest.importorskip("atheris")

_MARKUP = ["----", "|===", "////", "--", "* ", "** ", ". ", "NOTE: ", "Term:: ", "+", " ", "    "]


def test_classify_line_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    seen = set()

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        line = provider.ConsumeUnicodeNoSurrogates(64)
        kind = classify_line(line, starts_paragraph=provider.ConsumeBool())
        assert isinstance(kind, LineKind)
        seen.add(kind)

    assert seen  # ensure we exercised the loop


def test_reflow_with_fuzzed_documents():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        prefix = _MARKUP[provider.ConsumeIntInRange(0, len(_MARKUP) - 1)]
        lines.append(prefix + provider.ConsumeUnicodeNoSurrogates(48).replace("\n", " "))

    width = provider.ConsumeIntInRange(-2, 120) if provider.remaining_bytes() else 40
    document = "\n".join(lines) + "\n"

    out = reflow(document, width)
    assert isinstance(out, str)
    assert out.endswith("\n")
