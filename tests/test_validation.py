import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fitcheck.extraction.fetch import JOB_FETCH_ERROR, RESUME_FETCH_ERROR, UNUSABLE_JOB_PAGE_MESSAGE  # noqa: E402
from fitcheck.extraction.normalize import NON_TEXT_MARKER  # noqa: E402
from fitcheck.extraction.validation import (  # noqa: E402
    ValidationVerdict,
    is_too_short,
    is_unusable_page_notice,
    looks_like_error_page,
    looks_like_search_results,
    looks_like_unusable_page,
    validate,
)


class JobValidationTests(unittest.TestCase):
    def test_length_boundary(self):
        self.assertEqual(validate("j" * 99, "job"), ValidationVerdict.TOO_SHORT)
        self.assertEqual(validate("j" * 100, "job"), ValidationVerdict.VALID)

    def test_search_page_under_500_chars(self):
        text = "Search jobs by keyword or location. " + "Filter results. " * 8
        self.assertLess(len(text), 500)
        self.assertEqual(validate(text, "job"), ValidationVerdict.LOOKS_LIKE_SEARCH_RESULTS)

    def test_search_marker_in_long_posting_is_valid(self):
        text = "Backend engineer role. " * 30 + "You can also search jobs on our site."
        self.assertGreaterEqual(len(text), 500)
        self.assertEqual(validate(text, "job"), ValidationVerdict.VALID)

    def test_error_page_markers_are_fetch_time_only(self):
        self.assertTrue(looks_like_error_page("ACCESS DENIED"))
        self.assertTrue(looks_like_error_page("404 - Page Not Found"))
        self.assertFalse(looks_like_error_page("Access to denied claims database"))

    def test_posting_mentioning_marker_phrases_is_valid(self):
        text = (
            "Identity and Access Management Engineer. Own SSO and RBAC for 3,000 employees, "
            "investigate access denied errors in Okta and AWS IAM, and fix page not found "
            "redirects in the internal portal. Python and Terraform required."
        )
        self.assertGreaterEqual(len(text), 100)
        self.assertEqual(validate(text, "job"), ValidationVerdict.VALID)

    def test_fetch_failure_strings_never_validate(self):
        self.assertEqual(len(JOB_FETCH_ERROR), 71)
        self.assertEqual(validate(JOB_FETCH_ERROR, "job"), ValidationVerdict.TOO_SHORT)
        self.assertEqual(validate(NON_TEXT_MARKER, "job"), ValidationVerdict.TOO_SHORT)
        self.assertGreater(len(UNUSABLE_JOB_PAGE_MESSAGE), 100)
        self.assertEqual(validate(UNUSABLE_JOB_PAGE_MESSAGE, "job"), ValidationVerdict.LOOKS_LIKE_ERROR_PAGE)
        self.assertTrue(is_unusable_page_notice(f"  {UNUSABLE_JOB_PAGE_MESSAGE}\n"))

    def test_quoting_the_notice_inside_a_posting_is_valid(self):
        text = "Support engineer role. Customers sometimes report: " + UNUSABLE_JOB_PAGE_MESSAGE
        self.assertFalse(is_unusable_page_notice(text))
        self.assertEqual(validate(text, "job"), ValidationVerdict.VALID)


class ResumeValidationTests(unittest.TestCase):
    def test_length_boundary(self):
        self.assertEqual(validate("r" * 49, "resume"), ValidationVerdict.TOO_SHORT)
        self.assertEqual(validate("r" * 50, "resume"), ValidationVerdict.VALID)

    def test_resume_ignores_job_markers(self):
        text = "Jane Doe. Security engineer who handled access denied incidents and page not found alerts."
        self.assertEqual(validate(text, "resume"), ValidationVerdict.VALID)

    def test_resume_fetch_failure_is_too_short(self):
        self.assertLess(len(RESUME_FETCH_ERROR), 50)
        self.assertEqual(validate(RESUME_FETCH_ERROR, "resume"), ValidationVerdict.TOO_SHORT)


class PredicateTests(unittest.TestCase):
    def test_is_too_short_uses_role_threshold(self):
        self.assertTrue(is_too_short("x" * 60, "job"))
        self.assertFalse(is_too_short("x" * 60, "resume"))
        self.assertTrue(is_too_short("", "resume"))

    def test_search_results_requires_short_text(self):
        self.assertTrue(looks_like_search_results("Search Jobs"))
        self.assertFalse(looks_like_search_results("search jobs " + "x" * 600))

    def test_unusable_page_flags_any_search_marker(self):
        long_page = "Careers home. Search jobs here. " + "Lorem ipsum dolor sit amet. " * 30
        self.assertTrue(looks_like_unusable_page(long_page))
        self.assertTrue(looks_like_unusable_page("short"))
        self.assertFalse(looks_like_unusable_page("We are hiring a data engineer. " * 5))


if __name__ == "__main__":
    unittest.main()
