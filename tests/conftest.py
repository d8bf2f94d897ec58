from pathlib import Path

import pytest

from latexextr.config import Settings

SAMPLE_LATEX = r"""\documentclass{article}
\begin{document}
Pythagoras: \(a^2+b^2=c^2\) and Einstein $E=mc^2$.
\begin{equation}
\label{eq:euler}
e^{i\pi} + 1 = 0 % Euler
\end{equation}
\end{document}
"""


@pytest.fixture
def sample_latex():
    return SAMPLE_LATEX


@pytest.fixture
def settings(tmp_path):
    return Settings(
        temp_dir=tmp_path / "temp",
        output_dir=tmp_path / "latex_files",
        cors_allow_origins=["https://latex-extr.netlify.app"],
    )


@pytest.fixture
def fake_pandoc(monkeypatch):
    """Replace the pandoc call with one that copies the upload verbatim.

    Tests upload LaTeX text directly, so "conversion" is a plain copy.
    """
    calls = []

    async def _fake_convert(input_path, output_path, pandoc_binary="pandoc", timeout=120.0):
        calls.append((Path(input_path), Path(output_path)))
        Path(output_path).write_bytes(Path(input_path).read_bytes())
        return Path(output_path)

    from latexextr.extractor import pipeline as pipeline_mod

    monkeypatch.setattr(pipeline_mod, "aconvert_to_latex", _fake_convert)
    return calls
