import io

import pytest
from rich.console import Console

from pdfmd import Application
from pdfmd_lib.reconstructor import DocumentReconstructor, build_linear_document
from pdfmd_lib.sources import ExtractionError


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "paper.pdf").write_text("%PDF-1.4 mock", encoding="utf-8")
    return tmp_path


@pytest.fixture
def mock_setup_logging(mocker):
    return mocker.patch("pdfmd.setup_logging")


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    app = Application(
        Application.parse_arguments(argv),
        console=Console(file=out, width=120),
        err_console=Console(file=err, width=120),
    )
    return app.run(), out.getvalue(), err.getvalue()


def test_parse_arguments_positional_files():
    args = Application.parse_arguments(["--", "paper.pdf", "out.md"])
    assert args.pdf_file == "paper.pdf"
    assert args.output_file == "out.md"
    assert args.pages == "all"
    assert args.mode is None


def test_parse_arguments_debug_without_topics_means_all():
    args = Application.parse_arguments(["paper.pdf", "-d"])
    assert args.debug_topics == "all"


def test_non_pdf_input_is_rejected(workdir, mock_setup_logging):
    code, _, err = _run(["notes.txt"])
    assert code == 1
    assert "Input must be a PDF file. Received: notes.txt" in err


def test_missing_pdf_is_reported(workdir, mock_setup_logging):
    code, _, err = _run(["absent.pdf"])
    assert code == 1
    assert "PDF not found: absent.pdf" in err


def test_missing_input_prints_usage(workdir, mock_setup_logging, mocker):
    mock_process = mocker.patch("pdfmd.process_pdf_text")
    code, _, err = _run([])
    assert code == 1
    assert err.startswith("Usage:")
    mock_process.assert_not_called()


def test_pdf_output_path_is_refused(workdir, mock_setup_logging, mocker):
    mock_process = mocker.patch("pdfmd.process_pdf_text")
    code, _, err = _run(["paper.pdf", "copy.pdf"])
    assert code == 1
    assert "Refusing to write output to PDF path: copy.pdf" in err
    mock_process.assert_not_called()


def test_markdown_file_is_written(workdir, mock_setup_logging, mocker, scenario_page):
    document = DocumentReconstructor().build_document([scenario_page])
    mock_process = mocker.patch("pdfmd.process_pdf_text", return_value=document)

    code, out, _ = _run(["paper.pdf", "-p", "1-2"])

    assert code == 0
    mock_process.assert_called_once_with(
        "paper.pdf", mode="semantic", engine="pdftohtml", timeout=600.0, pages_str="1-2"
    )
    written = (workdir / "paper.md").read_text(encoding="utf-8")
    assert written.startswith("# paper.pdf\n\n## INTRODUCTION")
    assert "Extracted text to markdown: paper.md" in out


def test_text_format_to_explicit_output(workdir, mock_setup_logging, mocker):
    document = build_linear_document("one\ftwo\f", "raw")
    mocker.patch("pdfmd.process_pdf_text", return_value=document)

    code, _, _ = _run(["paper.pdf", "result.txt", "-m", "raw", "-f", "text"])

    assert code == 0
    assert (workdir / "result.txt").read_text(encoding="utf-8") == "one\n\f\ntwo\n"


def test_stdout_writes_no_file(workdir, mock_setup_logging, mocker):
    mocker.patch(
        "pdfmd.process_pdf_text", return_value=build_linear_document("hello", "default")
    )
    code, out, _ = _run(["paper.pdf", "--stdout", "-f", "text", "-m", "default"])
    assert code == 0
    assert out == "hello\n"
    assert not (workdir / "paper.txt").exists()


def test_extraction_failure_exits_nonzero(workdir, mock_setup_logging, mocker):
    mocker.patch(
        "pdfmd.process_pdf_text",
        side_effect=ExtractionError("Missing dependency: pdftohtml. Install poppler and retry."),
    )
    code, _, err = _run(["paper.pdf"])
    assert code == 1
    assert "Failed to extract PDF text." in err
    assert "Missing dependency: pdftohtml" in err
    assert not (workdir / "paper.md").exists()


def test_invalid_config_is_reported(workdir, mock_setup_logging):
    (workdir / "pdfmd.cfg").write_text("[Extraction]\nmode = ocr\n", encoding="utf-8")
    code, _, err = _run(["paper.pdf"])
    assert code == 1
    assert "ocr" in err


def test_stdout_keeps_page_separators_and_literal_text(workdir, mock_setup_logging, mocker):
    document = build_linear_document("one :thumbs_up: [bold]x[/bold]\ftwo\f", "raw")
    mocker.patch("pdfmd.process_pdf_text", return_value=document)

    code, out, _ = _run(["paper.pdf", "--stdout", "-f", "text", "-m", "raw"])

    assert code == 0
    assert out == "one :thumbs_up: [bold]x[/bold]\n\f\ntwo\n"
