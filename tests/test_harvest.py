"""
Tests for Name Harvesting
=========================
Tests for NameHarvester, HarvestResult and write_names in namekit/harvest.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namekit.chain import SequenceModel
from namekit.corpus import load_names
from namekit.filters import FilterPipeline, capitalized, min_length, max_length
from namekit.harvest import (
    NameHarvester,
    HarvestResult,
    write_names,
    REJECT_EMPTY,
    REJECT_NOT_GENERATED,
    REJECT_NOT_UNIQUE,
    REJECT_MAX_STEPS,
)

PLANETS = load_names(ROOT / "namekit" / "data" / "planet_names.txt")


def trained(corpus, order, seed=1):
    model = SequenceModel(order=order, seed=seed)
    model.train(corpus)
    return model


class TestGrow:
    """Tests for growing a single candidate."""

    def test_grows_until_model_stops(self):
        """Test a candidate grows until the length stops changing."""
        harvester = NameHarvester(trained(["ABCD"], 2), FilterPipeline(), max_steps=20)
        sequence, reason = harvester.grow()
        assert str(sequence) == "ABCD"
        assert reason is None

    def test_prefix_rejection_stops_early(self):
        """Test a bad start is abandoned after one symbol."""
        harvester = NameHarvester(trained(["aba"], 2), FilterPipeline([capitalized()]), max_steps=20)
        sequence, reason = harvester.grow()
        assert str(sequence) == "a"
        assert reason == 'not_capitalized'

    def test_max_steps_cap(self):
        """Test the hard cap cuts a long candidate."""
        harvester = NameHarvester(trained(["ABCDEFG"], 2), FilterPipeline(), max_steps=3)
        sequence, reason = harvester.grow()
        assert str(sequence) == "ABC"
        assert reason == REJECT_MAX_STEPS

    def test_cap_and_length_filter_reported_apart(self):
        """Test the step cap and the max_length filter have different reasons."""
        capped = NameHarvester(trained(["ABCDEFG"], 2), FilterPipeline([max_length(10)]), max_steps=3)
        filtered = NameHarvester(trained(["ABCDEFG"], 2), FilterPipeline([max_length(2)]), max_steps=3)
        assert capped.grow()[1] == REJECT_MAX_STEPS
        assert filtered.grow()[1] == 'too_long'
        assert REJECT_MAX_STEPS != 'too_long'

    def test_max_steps_must_be_positive(self):
        """Test a zero cap is a configuration error."""
        with pytest.raises(ValueError):
            NameHarvester(trained(["AB"], 2), FilterPipeline(), max_steps=0)

    def test_defaults_from_settings(self):
        """Test pipeline and cap come from app.yaml when omitted."""
        harvester = NameHarvester(trained(["AB"], 2))
        assert len(harvester.pipeline) == 5
        assert harvester.max_steps == 40


class TestClassify:
    """Tests for finished-candidate classification."""

    @pytest.fixture
    def harvester(self):
        pipeline = FilterPipeline([capitalized(), min_length(3)])
        return NameHarvester(trained(["Aba"], 2), pipeline, known={"Aba"}, max_steps=20)

    def test_empty(self, harvester):
        """Test an empty candidate."""
        assert harvester.classify("", set()) == REJECT_EMPTY

    def test_filter_failure(self, harvester):
        """Test whole-name filters run on finished names."""
        assert harvester.classify("Ab", set()) == 'too_short'

    def test_training_name(self, harvester):
        """Test a regenerated training name is rejected."""
        assert harvester.classify("Aba", set()) == REJECT_NOT_GENERATED

    def test_duplicate(self, harvester):
        """Test a name already accepted is rejected."""
        assert harvester.classify("Abab", {"Abab"}) == REJECT_NOT_UNIQUE

    def test_accept(self, harvester):
        """Test a novel acceptable name."""
        assert harvester.classify("Abab", set()) is None


class TestHarvest:
    """Tests for the retry loop."""

    def test_collects_novel_unique_names(self):
        """Test accepted names are novel, unique and pass the filters."""
        model = trained(["Aba", "Bab"], 1, seed=21)
        pipeline = FilterPipeline([capitalized(), min_length(3), max_length(6)])
        harvester = NameHarvester(model, pipeline, known={"Aba", "Bab"}, max_steps=20)

        result = harvester.harvest(count=3, max_attempts=1000)

        assert result.accepted == 3
        assert len(set(result.names)) == 3
        for name in result.names:
            assert name not in {"Aba", "Bab"}
            assert pipeline.check(name) == (True, None)
        assert set(result.rejections) <= {'too_short', 'too_long', REJECT_NOT_GENERATED, REJECT_NOT_UNIQUE}
        assert result.attempts == result.accepted + result.rejected

    def test_gives_up_after_max_attempts(self):
        """Test a model that only reproduces training names runs out of attempts."""
        harvester = NameHarvester(trained(["ABCD"], 2), FilterPipeline(), known={"ABCD"}, max_steps=20)
        result = harvester.harvest(count=1, max_attempts=5)
        assert result.names == []
        assert result.attempts == 5
        assert result.rejections == {REJECT_NOT_GENERATED: 5}

    def test_prefix_rejections_count_as_attempts(self):
        """Test restarts after a bad prefix are bounded by max_attempts."""
        harvester = NameHarvester(trained(["aba"], 2), FilterPipeline([capitalized()]), max_steps=20)
        result = harvester.harvest(count=2, max_attempts=10)
        assert result.accepted == 0
        assert result.rejections == {'not_capitalized': 10}

    def test_progress_callback(self):
        """Test the callback sees every attempt."""
        seen = []
        harvester = NameHarvester(trained(["ABCD"], 2), FilterPipeline(), max_steps=20)
        harvester.harvest(count=1, max_attempts=4, on_progress=lambda r: seen.append(r.attempts))
        assert seen == [1]

    def test_zero_count(self):
        """Test asking for nothing does no work."""
        harvester = NameHarvester(trained(["ABCD"], 2), FilterPipeline(), max_steps=20)
        result = harvester.harvest(count=0, max_attempts=10)
        assert result.attempts == 0

    def test_negative_count_rejected(self):
        """Test negative arguments are rejected."""
        harvester = NameHarvester(trained(["ABCD"], 2), FilterPipeline(), max_steps=20)
        with pytest.raises(ValueError):
            harvester.harvest(count=-1, max_attempts=10)

    def test_planet_names_with_default_filters(self):
        """Test a realistic run with the configured filters."""
        model = trained(PLANETS, 3, seed=314)
        harvester = NameHarvester(model, known=PLANETS)
        result = harvester.harvest(count=5, max_attempts=3000)
        assert result.accepted == 5
        assert not set(result.names) & set(PLANETS)
        for name in result.names:
            assert harvester.pipeline.check(name) == (True, None)

    def test_seeded_runs_match(self):
        """Test the same seed harvests the same names."""
        def run():
            harvester = NameHarvester(trained(PLANETS, 3, seed=99), known=PLANETS)
            return harvester.harvest(count=5, max_attempts=3000).names
        assert run() == run()


class TestHarvestResult:
    """Tests for HarvestResult."""

    def test_defaults(self):
        """Test an empty result."""
        result = HarvestResult()
        assert result.accepted == 0
        assert result.rejected == 0
        assert result.pass_rate == 0.0

    def test_pass_rate(self):
        """Test pass rate is accepted over attempts."""
        result = HarvestResult(names=["A"], attempts=4)
        result.rejections['too_short'] = 3
        assert result.pass_rate == pytest.approx(25.0)
        assert result.rejected == 3


class TestWriteNames:
    """Tests for output persistence."""

    def test_sorted_unique(self, tmp_path):
        """Test names are written sorted and deduplicated."""
        path = write_names(tmp_path / "out.txt", ["Zorath", "Ardun", "Zorath"])
        assert path.read_text(encoding='utf-8') == "Ardun\nZorath\n"

    def test_truncates_existing(self, tmp_path):
        """Test an existing file is overwritten."""
        path = tmp_path / "out.txt"
        path.write_text("old\nstuff\n", encoding='utf-8')
        write_names(path, ["New"])
        assert path.read_text(encoding='utf-8') == "New\n"

    def test_creates_parent_dirs(self, tmp_path):
        """Test missing directories are created."""
        path = write_names(tmp_path / "a" / "b" / "out.txt", [])
        assert path.exists()
        assert path.read_text(encoding='utf-8') == ""
