"""Tests for release selection and the update decision."""

import logging

import pytest

from release_checker.models import Channel, InvalidChannelError, ReleaseCandidate
from release_checker.selector import evaluate, select_release


def release(tag, prerelease=False):
    return ReleaseCandidate(tag=tag, is_prerelease=prerelease, url=f"https://example.org/releases/{tag}")


class TestSelectRelease:

    def test_stable_takes_first_stable_entry(self):
        feed = [release("2.1.0-beta", True), release("2.0.5"), release("2.0.4")]
        assert select_release(feed, Channel.STABLE).tag == "2.0.5"

    def test_beta_takes_first_entry(self):
        feed = [release("2.1.0-beta", True), release("2.0.5")]
        assert select_release(feed, Channel.BETA).tag == "2.1.0-beta"

    def test_beta_takes_stable_when_first(self):
        feed = [release("2.0.5"), release("2.1.0-beta", True)]
        assert select_release(feed, Channel.BETA).tag == "2.0.5"

    def test_order_preserved_not_max_version(self):
        feed = [release("1.0.5"), release("1.1.0")]
        assert select_release(feed, Channel.STABLE).tag == "1.0.5"

    def test_empty_feed(self):
        assert select_release([], Channel.STABLE) is None
        assert select_release([], Channel.BETA) is None

    def test_no_stable_entry(self):
        feed = [release("3.0.0-rc1", True), release("3.0.0-beta", True)]
        assert select_release(feed, Channel.STABLE) is None

    def test_accepts_channel_index(self):
        feed = [release("2.1.0-beta", True), release("2.0.5")]
        assert select_release(feed, 1).tag == "2.1.0-beta"

    def test_rejects_invalid_channel(self):
        with pytest.raises(InvalidChannelError):
            select_release([release("1.0.0")], 2)


class TestEvaluate:

    def test_first_stable_match_not_max(self):
        feed = [release("1.1.0"), release("1.0.5")]
        decision = evaluate("1.0.0", feed, Channel.STABLE)
        assert decision.available is True
        assert decision.chosen_tag == "1.1.0"
        assert decision.chosen_url == "https://example.org/releases/1.1.0"

    def test_stable_skips_prerelease_entry(self):
        feed = [release("2.1.0-beta", True), release("2.0.5")]
        decision = evaluate("2.0.0", feed, Channel.STABLE)
        assert decision.available is True
        assert decision.chosen_tag == "2.0.5"

    def test_beta_picks_first_entry(self):
        feed = [release("2.1.0-beta", True), release("2.0.5")]
        decision = evaluate("2.0.0", feed, Channel.BETA)
        assert decision.available is True
        assert decision.chosen_tag == "2.1.0-beta"
        assert decision.channel is Channel.BETA

    @pytest.mark.parametrize("channel", [Channel.STABLE, Channel.BETA])
    def test_empty_feed_means_no_update(self, channel):
        decision = evaluate("1.0.0", [], channel)
        assert decision.available is False
        assert decision.chosen_tag is None
        assert decision.chosen_url is None

    @pytest.mark.parametrize("channel", [Channel.STABLE, Channel.BETA])
    def test_equal_version_is_not_an_update(self, channel):
        decision = evaluate("3.0.0", [release("3.0.0")], channel)
        assert decision.available is False

    def test_older_remote_is_not_an_update(self):
        assert evaluate("2.0.0", [release("1.9.9")], Channel.STABLE).available is False

    def test_prefix_does_not_matter(self):
        assert evaluate("1.0.0", [release("v1.0.0")], Channel.STABLE).available is False
        assert evaluate("v1.0.0", [release("v1.0.1")], Channel.STABLE).available is True

    def test_no_stable_release(self):
        feed = [release("9.0.0-rc1", True)]
        assert evaluate("1.0.0", feed, Channel.STABLE).available is False
        assert evaluate("1.0.0", feed, Channel.BETA).available is True

    def test_stable_rejects_labelled_tag_without_flag(self):
        feed = [release("2.0.0-rc1", False)]
        assert evaluate("1.0.0", feed, Channel.STABLE).available is False
        assert evaluate("1.0.0", feed, Channel.BETA).available is True

    def test_beta_stable_release_over_local_prerelease(self):
        decision = evaluate("2.0.0-beta", [release("2.0.0")], Channel.BETA)
        assert decision.available is True

    def test_beta_same_version_prerelease_is_older_than_local_stable(self):
        assert evaluate("2.0.0", [release("2.0.0-rc1", True)], Channel.BETA).available is False

    def test_invalid_remote_tag_degrades_to_no_update(self, caplog):
        with caplog.at_level(logging.WARNING, logger="release_checker.selector"):
            decision = evaluate("1.0.0", [release("nightly-build")], Channel.STABLE)
        assert decision.available is False
        assert "nightly-build" in caplog.text

    def test_oversized_remote_tag_degrades_to_no_update(self, caplog):
        tag = "9" * 5000 + ".0.0"
        with caplog.at_level(logging.WARNING, logger="release_checker.selector"):
            decision = evaluate("1.0.0", [release(tag)], Channel.STABLE)
        assert decision.available is False
        assert "Invalid remote version" in caplog.text

    def test_accepts_iterator_feed(self):
        feed = iter([release("2.1.0-beta", True), release("2.0.5")])
        assert evaluate("2.0.0", feed, Channel.STABLE).chosen_tag == "2.0.5"

    def test_iterator_without_match(self):
        feed = filter(lambda r: not r.is_prerelease, [release("3.0.0-rc1", True)])
        assert evaluate("1.0.0", feed, Channel.STABLE).available is False
        assert select_release(iter([]), Channel.BETA) is None

    def test_invalid_local_version_treated_as_oldest(self, caplog):
        with caplog.at_level(logging.WARNING, logger="release_checker.selector"):
            decision = evaluate("dev", [release("0.0.1")], Channel.STABLE)
        assert decision.available is True
        assert "Invalid local version" in caplog.text

    def test_rejects_invalid_channel(self):
        with pytest.raises(InvalidChannelError):
            evaluate("1.0.0", [release("2.0.0")], "nightly")

    def test_accepts_channel_name(self):
        assert evaluate("1.0.0", [release("2.0.0")], "stable").channel is Channel.STABLE

    def test_decision_records_inputs(self):
        decision = evaluate("1.0.0", [], Channel.STABLE)
        assert decision.local_version == "1.0.0"
        assert decision.channel is Channel.STABLE

    def test_deterministic(self):
        feed = [release("2.1.0-beta", True), release("2.0.5")]
        first = evaluate("2.0.0", feed, Channel.BETA)
        second = evaluate("2.0.0", feed, Channel.BETA)
        assert first == second

    def test_feed_not_modified(self):
        feed = [release("2.1.0-beta", True), release("2.0.5")]
        snapshot = list(feed)
        evaluate("2.0.0", feed, Channel.STABLE)
        assert feed == snapshot
