"""
Tests for mentor_recs/models/challenge.py.

What we test
------------
- ChallengeTemplate tags are case-folded; templates are frozen.
- DailyChallenge is mutable (completion recorded later); effort 1-5.
- ChallengeStats defaults are empty.
"""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from mentor_recs.models.challenge import ChallengeStats, DailyChallenge
from mentor_recs.taxonomy.path_taxonomy import ChallengeDifficulty, TrainingPath


def _daily(**overrides) -> DailyChallenge:
    kwargs = dict(
        title="Make Your Bed",
        description="Make your bed right after getting up.",
        path=TrainingPath.DISCIPLINE,
        difficulty=ChallengeDifficulty.MICRO,
        challenge_date=date(2025, 1, 15),
    )
    kwargs.update(overrides)
    return DailyChallenge(**kwargs)


class TestChallengeTemplate:
    def test_tags_casefolded(self, make_challenge_template):
        tmpl = make_challenge_template(tags=["Morning", " "])
        assert tmpl.tags == ("morning",)

    def test_frozen(self, make_challenge_template):
        tmpl = make_challenge_template()
        with pytest.raises(ValidationError):
            tmpl.is_active = False

    def test_blank_title_rejected(self, make_challenge_template):
        with pytest.raises(ValidationError):
            make_challenge_template(title="")


class TestDailyChallenge:
    def test_completion_can_be_recorded(self):
        challenge = _daily()
        challenge.is_completed = True
        assert challenge.is_completed

    @pytest.mark.parametrize("effort", [0, 6])
    def test_effort_range(self, effort):
        with pytest.raises(ValidationError):
            _daily(effort_level=effort)


class TestChallengeStats:
    def test_defaults(self):
        stats = ChallengeStats()
        assert stats.category_success_rates == {}
        assert stats.weekday_preferences == {}
        assert stats.preferred_difficulty is ChallengeDifficulty.STANDARD
