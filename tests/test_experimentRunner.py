import csv

import pytest

from experimentRunner import ExperimentRunner


def test_generate_scenarios_requires_definition():
    with pytest.raises(ValueError):
        ExperimentRunner().generate_scenarios()


def test_generate_scenarios_is_cartesian_product():
    runner = ExperimentRunner()
    runner.define_experiment({'num_baristas': [1, 2], 'prob_priority': [0.1, 0.2, 0.3]})
    scenarios = runner.generate_scenarios()
    assert len(scenarios) == 6
    assert {'num_baristas': 2, 'prob_priority': 0.3} in scenarios


def test_unknown_variable_rejected():
    runner = ExperimentRunner()
    with pytest.raises(ValueError):
        runner.run_single_scenario({'num_cashiers': 3}, seed=1, sim_duration=60)


def test_run_experiment_writes_csv(tmp_path):
    runner = ExperimentRunner()
    runner.define_experiment({'num_baristas': [1, 2]}, num_replications=2, sim_duration=120)
    output = tmp_path / "results.csv"
    results = runner.run_experiment(str(output), verbose=False)
    assert len(results) == 4

    with open(output, newline='') as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert list(rows[0].keys())[:4] == ['scenario_id', 'replication', 'random_seed', 'num_baristas']
    assert 'total_revenue' in rows[0]

    runner.save_results_json(str(tmp_path / "results.json"))
    assert (tmp_path / "results.json").exists()
