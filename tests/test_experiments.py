import random

from slidetile.domains.board import Direction, PuzzleState
from slidetile.experiments import analyze, demo, plot, runner, visualize_path


def test_generate_instances_is_seeded() -> None:
    a = runner.generate_instances(3, 3, [10, 50], 3, start_seed=4)
    b = runner.generate_instances(3, 3, [10, 50], 3, start_seed=4)
    assert len(a) == 6
    assert [i.seed for i in a] == list(range(4, 10))
    assert [i.state for i in a] == [i.state for i in b]
    assert all(i.state.is_solvable() for i in a)


def test_unsolvable_variant_flips_parity() -> None:
    s = PuzzleState.solved(3, 3)
    s.shuffle(30, rng=random.Random(0))
    u = runner.make_unsolvable_variant(s)
    assert s.is_solvable()
    assert not u.is_solvable()


def test_solve_records_budget_termination() -> None:
    start = PuzzleState([1, 5, 2, 7, 0, 4, 6, 3, 8], 3, 3)
    goal = PuzzleState.solved(3, 3)
    row = runner.solve(start, goal, max_expansions=5)
    assert row["termination"] == "budget"
    assert row["explored"] == 5
    assert row["generated"] > 0
    assert float(row["time_sec"]) >= 0.0

    row = runner.solve(start, goal, heuristic="manhattan")
    assert row["termination"] == "ok"
    assert row["path_len"] > 0


def test_budget_is_inclusive_and_spares_the_goal() -> None:
    start = PuzzleState([1, 5, 2, 7, 0, 4, 6, 3, 8], 3, 3)
    goal = PuzzleState.solved(3, 3)
    row = runner.solve(start, goal, max_expansions=212)
    assert row["termination"] == "ok"
    assert row["explored"] == 212

    row = runner.solve(start, goal, max_expansions=211)
    assert row["termination"] == "budget"
    assert row["explored"] == 211


def test_runner_csv_feeds_analysis_and_plots(tmp_path) -> None:
    out = tmp_path / "run.csv"
    runner.main([
        "--rows", "2", "--cols", "3", "--steps", "5", "40",
        "--per_steps", "2", "--include_unsolvable", "--out", str(out),
    ])
    df = analyze.load_many([str(out)])
    assert len(df) == 8
    assert set(df["solvable"]) == {0, 1}
    assert set(df.loc[df["solvable"] == 0, "termination"]) == {"exhausted"}
    assert set(df.loc[df["solvable"] == 1, "termination"]) == {"ok"}

    summary = analyze.summarize(df)
    assert list(summary["steps"]) == [5, 40]
    assert "explored_mean" in summary.columns
    assert summary["n"].sum() == 4

    plot.main([str(out), "--save", str(tmp_path / "plots")])
    assert (tmp_path / "plots" / "run_combined.png").exists()
    assert (tmp_path / "plots" / "run_explored.png").exists()


def test_save_frames_writes_one_png_per_state(tmp_path) -> None:
    goal = PuzzleState.solved(2, 2)
    start = goal.neighbor(Direction.UP)
    paths = visualize_path.save_frames([start, goal], tmp_path, [Direction.DOWN])
    assert [p.name for p in paths] == ["step_000.png", "step_001.png"]
    assert all(p.exists() for p in paths)


def test_demo_prints_passing_check(capsys) -> None:
    assert demo.main(["--rows", "2", "--cols", "3", "--steps", "50", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "Searched number:" in out
    assert "Path correctness check: pass" in out
