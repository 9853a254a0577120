"""
Tests for legal link discovery.

Tests footer-first scanning, href resolution and the privacy path guess.
"""

import pytest

from privacy_intel.extraction import LinkClassifier, LinkSet, resolve_url

BASE = "https://acme.test"


class TestResolveUrl:
    """Tests for href resolution."""

    def test_relative_href(self):
        assert resolve_url("https://acme.test/about/", "../privacy") == "https://acme.test/privacy"

    def test_absolute_href_kept(self):
        assert resolve_url(BASE, "https://other.test/trust") == "https://other.test/trust"

    @pytest.mark.parametrize("href", ["javascript:void(0)", "mailto:privacy@acme.test", "tel:+15551234"])
    def test_non_http_schemes_skipped(self, href):
        assert resolve_url(BASE, href) is None

    def test_malformed_href_skipped(self):
        assert resolve_url(BASE, "http://[::1") is None


class TestLinkClassifier:
    """Tests for LinkClassifier.classify."""

    @pytest.fixture
    def classifier(self) -> LinkClassifier:
        return LinkClassifier()

    def test_footer_links_found(self, classifier, main_page_html):
        links = classifier.classify(main_page_html, BASE)

        assert links.privacy_policy == "https://acme.test/privacy-policy"
        assert links.trust_center == "https://trust.acme.test/"
        assert links.terms_of_service == "https://acme.test/terms-of-service"
        assert links.privacy_policy_guessed is False
        assert links.is_complete

    def test_footer_wins_over_earlier_body_link(self, classifier):
        html = """
        <body>
            <a href="/blog/privacy-tips">Privacy tips</a>
            <div class="site-footer"><a href="/privacy-notice">Privacy</a></div>
        </body>
        """
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/privacy-notice"

    def test_footer_detected_by_id(self, classifier):
        html = """
        <body>
            <a href="/security-blog">Security blog</a>
            <section id="pageFooter"><a href="/trust">Trust</a></section>
        </body>
        """
        links = classifier.classify(html, BASE)

        assert links.trust_center == "https://acme.test/trust"

    def test_document_scan_fills_missing_categories(self, classifier):
        html = """
        <body>
            <nav><a href="/security">Security</a></nav>
            <footer><a href="/privacy">Privacy</a></footer>
        </body>
        """
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/privacy"
        assert links.trust_center == "https://acme.test/security"

    def test_anchor_text_matches(self, classifier):
        html = '<footer><a href="/p/123">Your Privacy Choices</a></footer>'
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/p/123"

    def test_one_anchor_fills_several_categories(self, classifier):
        html = '<footer><a href="/legal/privacy">Legal</a></footer>'
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/legal/privacy"
        assert links.terms_of_service == "https://acme.test/legal/privacy"

    def test_unresolvable_href_skipped(self, classifier):
        html = """
        <footer>
            <a href="javascript:openPrivacy()">Privacy</a>
            <a href="/privacy-center">Privacy center</a>
        </footer>
        """
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/privacy-center"

    def test_no_privacy_link_guesses_common_path(self, classifier):
        html = '<footer><a href="/terms">Terms</a></footer>'
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/privacy"
        assert links.privacy_policy_guessed is True
        assert links.trust_center is None

    def test_guess_not_used_when_footer_matches(self, classifier):
        html = '<footer><a href="/data-protection">Data protection</a></footer>'
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/data-protection"
        assert links.privacy_policy_guessed is False

    def test_classification_is_deterministic(self, classifier, main_page_html):
        first = classifier.classify(main_page_html, BASE)
        second = classifier.classify(main_page_html, BASE)

        assert first == second

    def test_custom_patterns(self):
        classifier = LinkClassifier(
            privacy_patterns=[r"datenschutz"],
            fallback_privacy_paths=[],
        )
        html = '<footer><a href="/datenschutz">Datenschutz</a><a href="/privacy">Privacy</a></footer>'
        links = classifier.classify(html, BASE)

        assert links.privacy_policy == "https://acme.test/datenschutz"

    def test_no_fallback_paths_leaves_privacy_unset(self):
        classifier = LinkClassifier(fallback_privacy_paths=[])
        links = classifier.classify("<html><body><p>Hello</p></body></html>", BASE)

        assert links == LinkSet()
        assert links.is_empty

    def test_malformed_markup_tolerated(self, classifier):
        links = classifier.classify("<footer><a href='/privacy'>Privacy<div></footer", BASE)

        assert links.privacy_policy == "https://acme.test/privacy"


class TestLinkSet:
    """Tests for LinkSet helpers."""

    def test_without_privacy_policy(self):
        links = LinkSet(
            privacy_policy="https://acme.test/privacy",
            trust_center="https://acme.test/trust",
            privacy_policy_guessed=True,
        )

        dropped = links.without_privacy_policy()

        assert dropped.privacy_policy is None
        assert dropped.trust_center == "https://acme.test/trust"
        assert dropped.privacy_policy_guessed is False

    def test_to_dict(self):
        data = LinkSet(terms_of_service="https://acme.test/terms").to_dict()

        assert data["terms_of_service"] == "https://acme.test/terms"
        assert data["privacy_policy"] is None
