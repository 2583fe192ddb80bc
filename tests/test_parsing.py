import sys
import unittest
from io import BytesIO
from pathlib import Path

from docx import Document

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_copilot.parsing import UnsupportedDocumentError, parse_document  # noqa: E402
from career_copilot.parsing.document import source_type_for  # noqa: E402
from career_copilot.services.resume_validation import check_resume_text  # noqa: E402


def _docx_bytes(*paragraphs):
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class DocumentParsingTests(unittest.TestCase):
    def test_parse_txt(self):
        content = "Line one\n- Bullet item\nLine three"
        parsed = parse_document(content.encode("utf-8"), "resume.txt")
        self.assertEqual(parsed.source_type, "txt")
        self.assertEqual(parsed.text, content)
        self.assertEqual(parsed.filename, "resume.txt")
        self.assertEqual(parsed.parsing_warnings, [])

    def test_txt_with_invalid_utf8_is_replaced_with_warning(self):
        parsed = parse_document(b"caf\xe9 manager", "resume.txt")
        self.assertIn("manager", parsed.text)
        self.assertEqual(len(parsed.parsing_warnings), 1)

    def test_docx_paragraphs(self):
        content = _docx_bytes("Jane Doe", "", "Data Analyst at Acme")
        parsed = parse_document(content, "resume.docx")
        self.assertEqual(parsed.source_type, "docx")
        self.assertEqual(parsed.text, "Jane Doe\nData Analyst at Acme")
        self.assertEqual(parsed.parsing_warnings, [])

    def test_broken_files_yield_warnings_not_errors(self):
        for filename in ("resume.pdf", "resume.docx"):
            parsed = parse_document(b"definitely not a document", filename)
            self.assertEqual(parsed.text, "")
            self.assertTrue(parsed.parsing_warnings)

    def test_source_type_detection(self):
        self.assertEqual(source_type_for("CV.PDF"), "pdf")
        self.assertEqual(source_type_for("upload", "text/plain"), "txt")
        with self.assertRaises(UnsupportedDocumentError):
            source_type_for("resume.doc", "application/msword")


class ResumeCheckTests(unittest.TestCase):
    def test_too_short(self):
        check = check_resume_text("Engineer")
        self.assertFalse(check.is_valid)
        self.assertIn("too short", check.error)

    def test_not_a_resume(self):
        text = "The quick brown fox jumps over the lazy dog. " * 5
        check = check_resume_text(text)
        self.assertFalse(check.is_valid)
        self.assertIn("doesn't look like a resume", check.error)

    def test_plausible_resume(self):
        text = "Backend engineer with 6 years of experience. Skills: Python, Go, PostgreSQL. " * 2
        self.assertTrue(check_resume_text(text).is_valid)


if __name__ == "__main__":
    unittest.main()
