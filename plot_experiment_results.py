"""
Plot experiment results: one box plot per varied parameter against a report
metric (total revenue by default), read from the experiment runner's CSV.
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

# Config fields the experiment runner usually varies
PARAMETERS = [
    'num_baristas',
    'lambda_orders',
    'prob_priority',
    'restock_quantity',
    'restock_interval',
    'auto_restock',
]

METRIC_COLUMN = 'total_revenue'


def read_results(csv_file):
    df = pd.read_csv(csv_file)
    if 'error' in df.columns:
        df = df[df['error'].isna()]
    return df


def summarize_by_param(df, param_name, metric_col=METRIC_COLUMN):
    """Mean/std/count of the metric for every value of one parameter."""
    return (df.groupby(param_name)[metric_col]
              .agg(['mean', 'std', 'count'])
              .reset_index()
              .sort_values(param_name))


def plot_parameter_vs_metric(df, param_name, metric_col=METRIC_COLUMN, output_dir='plots'):
    if param_name not in df.columns:
        return None

    param_values = sorted(df[param_name].dropna().unique())
    grouped_data = [df[df[param_name] == v][metric_col].dropna().tolist() for v in param_values]
    labels = [str(v) for v, values in zip(param_values, grouped_data) if values]
    grouped_data = [values for values in grouped_data if values]
    if not grouped_data:
        return None

    fig, ax = plt.subplots(figsize=(10, 6))
    bp = ax.boxplot(grouped_data, patch_artist=True, showmeans=True, meanline=True)
    ax.set_xticks(range(1, len(labels) + 1))
    ax.set_xticklabels(labels)

    for patch in bp['boxes']:
        patch.set_facecolor('steelblue')
        patch.set_alpha(0.7)
        patch.set_edgecolor('black')
    plt.setp(bp['means'], color='red', linewidth=2, linestyle='--')

    ax.grid(True, alpha=0.3, linestyle='--', axis='y')
    ax.set_xlabel(param_name.replace('_', ' ').title(), fontsize=12, fontweight='bold')
    ax.set_ylabel(metric_col.replace('_', ' ').title(), fontsize=12, fontweight='bold')
    ax.set_title(f'{metric_col.replace("_", " ").title()} vs {param_name.replace("_", " ").title()}',
                 fontsize=14, fontweight='bold', pad=20)
    plt.tight_layout()

    output_path = Path(output_dir)
    output_path.mkdir(exist_ok=True)
    filepath = output_path / f'{param_name}_vs_{metric_col}.png'
    plt.savefig(filepath, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return filepath


def create_all_plots(csv_file, metric_col=METRIC_COLUMN, output_dir='plots'):
    df = read_results(csv_file)
    saved = []
    for param_name in PARAMETERS:
        # Only parameters that actually varied are worth a plot
        if param_name in df.columns and df[param_name].nunique() > 1:
            filepath = plot_parameter_vs_metric(df, param_name, metric_col, output_dir)
            if filepath:
                print(f"Saved: {filepath}")
                saved.append(filepath)
    return saved


if __name__ == "__main__":
    csv_file = sys.argv[1] if len(sys.argv) > 1 else 'experiment_results.csv'
    if not Path(csv_file).exists():
        print(f"Error: CSV file '{csv_file}' not found!")
        print("Usage: python plot_experiment_results.py [csv_file]")
        sys.exit(1)
    create_all_plots(csv_file)
