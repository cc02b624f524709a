"""Tests for the command-line scripts."""

import importlib.util
import json
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

SCRIPTS_DIR = Path(__file__).parent.parent / "scripts"


def _load_script(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def walkthrough():
    return _load_script("run_strategy_walkthrough")


class TestRunStrategyWalkthrough:
    """Tests for run_strategy_walkthrough.py."""

    def test_parse_param_overrides(self, walkthrough):
        params = walkthrough.parse_param_overrides(
            ["fast_window=20", "allow_short=true", "weights=[0.5, 0.25, 0.25]", "name=a=b"]
        )
        assert params == {
            "fast_window": 20,
            "allow_short": True,
            "weights": [0.5, 0.25, 0.25],
            "name": "a=b",
        }

    @pytest.mark.parametrize("pair, message", [
        ("fast_window", "must look like KEY=VALUE"),
        ("=5", "empty key"),
    ])
    def test_bad_param_override(self, walkthrough, pair, message):
        with pytest.raises(ValueError, match=message):
            walkthrough.parse_param_overrides([pair])

    def test_build_config_from_args(self, walkthrough):
        args = walkthrough.parse_arguments([
            "--source", "SPY", "--start-date", "2015-01-01", "--end-date", "2020-12-31",
            "--strategy", "trend", "--param", "sma_short=20", "--cost-bps", "5",
        ])
        config = walkthrough.build_config(args)

        assert config.data.source == "SPY"
        assert config.strategy.name == "trend"
        assert config.strategy.params == {"sma_short": 20}
        assert config.backtest.cost_bps == 5.0

    def test_build_config_requires_data_args(self, walkthrough):
        args = walkthrough.parse_arguments(["--source", "SPY"])
        with pytest.raises(ValueError, match="Missing required arguments without --config"):
            walkthrough.build_config(args)

    def test_main_saves_results(self, walkthrough, price_csv, tmp_path, capsys):
        output_dir = tmp_path / "out"
        code = walkthrough.main([
            "--source", str(price_csv),
            "--start-date", "2021-01-01",
            "--end-date", "2021-06-30",
            "--param", "fast_window=5",
            "--param", "slow_window=20",
            "--cost-bps", "2",
            "--output-dir", str(output_dir),
            "--verbose",
        ])

        assert code == 0
        for name in ("results.json", "timeseries.csv", "trades.csv", "yearly_summary.csv"):
            assert (output_dir / name).exists()

        saved = json.loads((output_dir / "results.json").read_text())
        assert saved["strategy"] == "MovingAverageCrossStrategy"
        assert saved["params"]["slow_window"] == 20
        assert "Walkthrough completed" in capsys.readouterr().out

    def test_main_from_yaml_config(self, walkthrough, price_csv, tmp_path):
        config_path = tmp_path / "run.yaml"
        config_path.write_text(
            "name: test run\n"
            "data:\n"
            f"  source: {price_csv.as_posix()}\n"
            "  start_date: '2021-01-01'\n"
            "  end_date: '2021-06-30'\n"
            "strategy:\n"
            "  name: meanrev\n"
            "  params: {rsi_period: 5, bb_period: 10, zscore_lookback: 10}\n"
        )
        assert walkthrough.main(["--config", str(config_path)]) == 0

    def test_main_reports_invalid_params(self, walkthrough, price_csv, capsys):
        code = walkthrough.main([
            "--source", str(price_csv),
            "--start-date", "2021-01-01",
            "--end-date", "2021-06-30",
            "--param", "fast_window=50",
            "--param", "slow_window=20",
        ])
        assert code == 1
        assert "must be < slow_window" in capsys.readouterr().err

    def test_main_missing_config_file(self, walkthrough, tmp_path, capsys):
        assert walkthrough.main(["--config", str(tmp_path / "nope.yaml")]) == 1
        assert "File not found" in capsys.readouterr().err


class TestClusterCsv:
    """Tests for cluster_csv.py."""

    @pytest.fixture
    def table_csv(self, tmp_path):
        rng = np.random.default_rng(1)
        df = pd.DataFrame({
            "name": [f"c{i}" for i in range(40)],
            "income": np.concatenate([rng.normal(40, 1, 20), rng.normal(90, 1, 20)]),
            "rate": np.concatenate([rng.normal(3, 0.1, 20), rng.normal(6, 0.1, 20)]),
        })
        path = tmp_path / "customers.csv"
        df.to_csv(path, index=False)
        return path

    def test_select_features(self):
        module = _load_script("cluster_csv")
        df = pd.DataFrame({"a": [1.0, np.nan, 3.0], "b": ["x", "y", "z"]})

        assert list(module.select_features(df, []).columns) == ["a"]
        assert len(module.select_features(df, ["a"])) == 2
        with pytest.raises(ValueError, match="Feature columns not found"):
            module.select_features(df, ["c"])
        with pytest.raises(ValueError, match="must be numeric"):
            module.select_features(df, ["b"])
        with pytest.raises(ValueError, match="No numeric columns"):
            module.select_features(df[["b"]], [])

    def test_standardize(self):
        module = _load_script("cluster_csv")
        out = module.standardize(pd.DataFrame({"a": [1.0, 2.0, 3.0], "flat": [5.0, 5.0, 5.0]}))
        assert out["a"].mean() == pytest.approx(0.0)
        assert out["a"].std(ddof=0) == pytest.approx(1.0)
        assert (out["flat"] == 0.0).all()

    def test_main_writes_clusters(self, table_csv, tmp_path):
        module = _load_script("cluster_csv")
        output = tmp_path / "clustered.csv"

        code = module.main([str(table_csv), "--k", "2", "--output", str(output)])

        assert code == 0
        result = pd.read_csv(output)
        assert "cluster" in result.columns
        assert result.groupby("cluster").size().tolist() == [20, 20]

    def test_main_elbow(self, table_csv, capsys):
        module = _load_script("cluster_csv")
        assert module.main([str(table_csv), "--elbow", "4"]) == 0
        assert "inertia" in capsys.readouterr().out

    def test_main_bad_feature(self, table_csv, capsys):
        module = _load_script("cluster_csv")
        assert module.main([str(table_csv), "--features", "ltv"]) == 1
        assert "Feature columns not found" in capsys.readouterr().err

    def test_main_mortgage_sample(self, tmp_path):
        module = _load_script("cluster_csv")
        generator = _load_script("generate_sample_data")
        path = tmp_path / "mortgages.csv"
        generator.generate_mortgage_records(n_rows=80).to_csv(path, index=False)

        code = module.main([
            str(path), "--clean-mortgage", "--k", "3",
            "--features", "loan_amount", "interest_rate", "income",
        ])
        assert code == 0


class TestDedupeNames:
    """Tests for dedupe_names.py."""

    def test_main_merges_spellings(self, tmp_path, capsys):
        module = _load_script("dedupe_names")
        path = tmp_path / "vendors.csv"
        pd.DataFrame({
            "vendor": ["Wells Fargo", "Wells Fargo", "Wels Fargo", "Chase"],
        }).to_csv(path, index=False)
        output = tmp_path / "clean.csv"

        code = module.main([str(path), "--column", "vendor", "--output-column", "canonical",
                            "--output", str(output)])

        assert code == 0
        result = pd.read_csv(output)
        assert result["canonical"].tolist() == ["Wells Fargo", "Wells Fargo", "Wells Fargo", "Chase"]
        assert result["vendor"].tolist()[2] == "Wels Fargo"
        assert "'Wels Fargo' → 'Wells Fargo'" in capsys.readouterr().out

    def test_main_missing_column(self, tmp_path, capsys):
        module = _load_script("dedupe_names")
        path = tmp_path / "vendors.csv"
        pd.DataFrame({"vendor": ["a"]}).to_csv(path, index=False)

        assert module.main([str(path), "--column", "name"]) == 1
        assert "Column not found: name" in capsys.readouterr().err


class TestListPosts:
    """Tests for list_posts.py."""

    def test_lists_posts(self, posts_dir, capsys):
        module = _load_script("list_posts")
        assert module.main(["--posts-dir", str(posts_dir)]) == 0
        out = capsys.readouterr().out
        assert "golden-cross" in out
        assert "2 posts" in out

    def test_tag_counts(self, posts_dir, capsys):
        module = _load_script("list_posts")
        assert module.main(["--posts-dir", str(posts_dir), "--tags"]) == 0
        assert "4 tags across 2 posts" in capsys.readouterr().out

    def test_filter_by_tag(self, posts_dir, capsys):
        module = _load_script("list_posts")
        assert module.main(["--posts-dir", str(posts_dir), "--tag", "cleaning"]) == 0
        out = capsys.readouterr().out
        assert "mortgage-cleaning" in out
        assert "golden-cross" not in out

    def test_strict_fails_on_broken_post(self, posts_dir, capsys):
        module = _load_script("list_posts")
        assert module.main(["--posts-dir", str(posts_dir), "--strict"]) == 1
        assert "Malformed post" in capsys.readouterr().err


class TestGenerateSampleData:
    """Tests for generate_sample_data.py."""

    def test_ohlcv_shape(self):
        module = _load_script("generate_sample_data")
        df = module.generate_ohlcv_data("2020-01-01", "2020-03-31", seed=1)

        assert list(df.columns) == ["Date", "Open", "High", "Low", "Close", "Adj Close", "Volume"]
        assert (df["High"] >= df[["Open", "Close"]].max(axis=1)).all()
        assert (df["Low"] <= df[["Open", "Close"]].min(axis=1)).all()

    def test_mortgage_records_are_messy(self):
        module = _load_script("generate_sample_data")
        df = module.generate_mortgage_records(n_rows=80)

        assert len(df) == 82
        assert df["Loan ID"].duplicated().sum() == 2
        assert df["LoanAmount"].str.startswith("$").all()
        assert df["Income"].isna().sum() >= 4
