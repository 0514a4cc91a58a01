import pytest

from pdfmd_lib.api import parse_page_selection, process_pdf_text
from pdfmd_lib.sources import parse_pdf2xml


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "paper.pdf"
    path.write_text("%PDF-1.4 mock", encoding="utf-8")
    return str(path)


@pytest.mark.parametrize(
    "selection, expected",
    [
        ("all", None),
        ("ALL", None),
        ("", None),
        ("1,3,5-7", {1, 3, 5, 6, 7}),
        (" 2 , 4 ", {2, 4}),
        ("1-x", None),
        ("3-1", None),
    ],
)
def test_parse_page_selection(selection, expected):
    assert parse_page_selection(selection) == expected


def test_missing_pdf_raises(tmp_path):
    with pytest.raises(FileNotFoundError, match="PDF not found"):
        process_pdf_text(str(tmp_path / "absent.pdf"))


def test_unknown_mode_raises(pdf_file):
    with pytest.raises(ValueError):
        process_pdf_text(pdf_file, mode="ocr")


def test_unknown_engine_raises(pdf_file):
    with pytest.raises(ValueError):
        process_pdf_text(pdf_file, engine="tesseract")


def test_semantic_mode_reconstructs_structural_pages(mocker, pdf_file, pdf2xml_text):
    mock_html = mocker.patch(
        "pdfmd_lib.api.run_pdftohtml", return_value=parse_pdf2xml(pdf2xml_text)
    )

    document = process_pdf_text(pdf_file, timeout=12)

    mock_html.assert_called_once_with(pdf_file, timeout=12)
    assert document.mode == "semantic"
    assert [p.text for p in document.pages] == [
        "INTRODUCTION\n\n"
        "This is a semantic paragraph line one.\n"
        "This is semantic paragraph line two.",
        "Second page & semantic content.",
    ]
    assert document.stats.pages == 2
    assert document.stats.lines == 5
    assert document.stats.chars == sum(len(p.text) for p in document.pages)


def test_semantic_mode_page_selection(mocker, pdf_file, pdf2xml_text):
    mocker.patch("pdfmd_lib.api.run_pdftohtml", return_value=parse_pdf2xml(pdf2xml_text))
    document = process_pdf_text(pdf_file, pages_str="2")
    assert [p.number for p in document.pages] == [2]
    assert document.stats.pages == 1


def test_pdfminer_engine_is_used_on_request(mocker, pdf_file, pdf2xml_text):
    mock_miner = mocker.patch(
        "pdfmd_lib.api.extract_pdfminer_pages", return_value=parse_pdf2xml(pdf2xml_text)[:1]
    )
    document = process_pdf_text(pdf_file, engine="pdfminer", pages_str="1")
    mock_miner.assert_called_once_with(pdf_file, pages_to_process={1})
    assert document.pages[0].blocks[0].text == "INTRODUCTION"


@pytest.mark.parametrize("mode", ["default", "layout", "raw"])
def test_linear_modes_split_pages(mocker, pdf_file, mode):
    mock_text = mocker.patch(
        "pdfmd_lib.api.run_pdftotext", return_value=f"{mode.upper()} PAGE 1\f{mode.upper()} PAGE 2\f"
    )
    document = process_pdf_text(pdf_file, mode=mode)
    mock_text.assert_called_once_with(pdf_file, mode=mode, timeout=600)
    assert document.mode == mode
    assert [p.text for p in document.pages] == [f"{mode.upper()} PAGE 1", f"{mode.upper()} PAGE 2"]
    assert document.stats.pages == 2
    assert document.stats.lines == 2


def test_reversed_range_logs_error_and_keeps_all_pages(mocker, pdf_file, pdf2xml_text, caplog):
    mocker.patch("pdfmd_lib.api.run_pdftohtml", return_value=parse_pdf2xml(pdf2xml_text))
    document = process_pdf_text(pdf_file, pages_str="3-1")
    assert [p.number for p in document.pages] == [1, 2]
    assert "Invalid page selection format: 3-1" in caplog.text
