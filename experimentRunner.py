"""
Experiment Runner for the cafe simulation.
Runs every combination of the given config variables over several random
seeds and collects the statistics reports for cross-replication analysis.
"""

import csv
import json
import logging
from datetime import datetime
from itertools import product

from cafeConfig import CafeConfig
from cafeErrors import CafeError
from cafeSim import CafeSim

logger = logging.getLogger(__name__)


class ExperimentRunner:
    def __init__(self):
        self.results = []
        self.experiment_config = None

    def define_experiment(self, variables_dict, num_replications=5, sim_duration=720):
        """
        Define experiment variables and their values.

        Args:
            variables_dict: config field name -> list of values, e.g.
                {'num_baristas': [1, 2, 3], 'prob_priority': [0.1, 0.3]}
            num_replications: Number of random seeds per scenario
            sim_duration: Simulated minutes per run (default: 720 = 12 hours)
        """
        self.experiment_config = {
            'variables': variables_dict,
            'num_replications': num_replications,
            'sim_duration': sim_duration
        }

    def generate_scenarios(self):
        """All combinations of variable values."""
        if not self.experiment_config:
            raise ValueError("Must define experiment first using define_experiment()")

        variables = self.experiment_config['variables']
        var_names = list(variables.keys())
        return [dict(zip(var_names, combination)) for combination in product(*variables.values())]

    def run_single_scenario(self, scenario, seed, sim_duration):
        config = CafeConfig()
        for var_name, var_value in scenario.items():
            if not hasattr(config, var_name):
                raise ValueError(f"Variable '{var_name}' not found in CafeConfig")
            setattr(config, var_name, var_value)
        config.random_seed = seed

        sim = CafeSim(config)
        sim.dispatcher.load_sample_data()
        sim.start()
        sim.run(sim_duration)
        return sim.stats.generate_report(sim_duration)

    def run_experiment(self, output_file, verbose=True):
        if not self.experiment_config:
            raise ValueError("Must define experiment first using define_experiment()")

        scenarios = self.generate_scenarios()
        num_replications = self.experiment_config['num_replications']
        sim_duration = self.experiment_config['sim_duration']
        total_runs = len(scenarios) * num_replications
        current_run = 0

        logger.info(f"Starting experiment: {len(scenarios)} scenarios x {num_replications} replications "
                    f"= {total_runs} runs of {sim_duration} minutes")

        for scenario_idx, scenario in enumerate(scenarios, 1):
            for rep in range(1, num_replications + 1):
                current_run += 1
                seed = rep  # Replication number doubles as the seed
                if verbose:
                    logger.info(f"Scenario {scenario_idx}/{len(scenarios)} {scenario}, "
                                f"seed {seed} [{current_run}/{total_runs}]")
                result = {
                    'scenario_id': scenario_idx,
                    'replication': rep,
                    'random_seed': seed,
                    **scenario,
                }
                try:
                    report = self.run_single_scenario(scenario, seed, sim_duration)
                    result.update(self.convert_to_json_serializable(report))
                except CafeError as e:
                    logger.error(f"Run {current_run} failed: {e}")
                    result['error'] = str(e)
                self.results.append(result)

        self.save_results(output_file)
        failed = len([r for r in self.results if 'error' in r])
        logger.info(f"Experiment completed: {len(self.results) - failed} ok, {failed} failed, "
                    f"results saved to {output_file}")
        return self.results

    def save_results(self, output_file):
        """Save results to CSV file."""
        if not self.results:
            logger.warning("No results to save")
            return

        all_keys = set()
        for result in self.results:
            all_keys.update(result.keys())

        # Scenario info first, then variables, then statistics
        scenario_keys = ['scenario_id', 'replication', 'random_seed']
        variable_keys = sorted([k for k in all_keys if k in self.experiment_config['variables']])
        stat_keys = sorted([k for k in all_keys if k not in scenario_keys and k not in variable_keys and k != 'error'])

        fieldnames = scenario_keys + variable_keys + stat_keys
        if 'error' in all_keys:
            fieldnames.append('error')

        with open(output_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for result in self.results:
                writer.writerow({key: result.get(key, '') for key in fieldnames})

    def convert_to_json_serializable(self, obj):
        if isinstance(obj, dict):
            return {str(key): self.convert_to_json_serializable(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self.convert_to_json_serializable(item) for item in obj]
        elif isinstance(obj, (int, float, str, bool)) or obj is None:
            return obj
        else:
            return str(obj)

    def save_results_json(self, output_file='experiment_results.json'):
        output = {
            'experiment_config': self.experiment_config,
            'timestamp': datetime.now().isoformat(),
            'results': [self.convert_to_json_serializable(result) for result in self.results]
        }
        with open(output_file, 'w') as f:
            json.dump(output, f, indent=2)
        logger.info(f"Results also saved to JSON: {output_file}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    runner = ExperimentRunner()
    runner.define_experiment(
        variables_dict={
            # ===== STAFFING =====
            'num_baristas': [1, 2, 3],
            # ===== DEMAND =====
            'lambda_orders': [20.0, 30.0, 40.0],
            'prob_priority': [0.1, 0.3],
            # ===== INVENTORY POLICY =====
            'restock_quantity': [20, 40],
            # 'restock_interval': [30.0, 60.0, 120.0],
            # 'auto_restock': [True, False],
        },
        num_replications=5,
        sim_duration=720
    )
    runner.run_experiment('experiment_results.csv')
    runner.save_results_json('experiment_results.json')
