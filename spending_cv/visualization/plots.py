"""
Plots for cross-validated spending predictions and their bootstrap interval.
"""

from typing import Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

from ..utils.bootstrap import BootstrapResult

DEFAULT_COLORS = {
    'primary': '#E64B35',      # Red
    'secondary': '#4DBBD5',    # Blue
    'tertiary': '#00A087',     # Green
    'neutral': '#808080',      # Gray
}

DEFAULT_FIGSIZE = (8, 5)
DEFAULT_DPI = 300
DEFAULT_FONTSIZE = {
    'title': 12,
    'label': 10,
    'legend': 9,
}


def _apply_base_style(ax: plt.Axes, grid: bool = False) -> None:
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    if grid:
        ax.grid(True, alpha=0.3, linestyle='--', linewidth=0.5)


def _figure_and_axes(
    ax: Optional[plt.Axes],
    figsize: Tuple[int, int]
) -> Tuple[plt.Figure, plt.Axes]:
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()
    return fig, ax


def plot_bootstrap_distribution(
    result: BootstrapResult,
    bins: int = 30,
    figsize: Tuple[int, int] = DEFAULT_FIGSIZE,
    title: Optional[str] = 'Bootstrapped mean spending',
    save_path: Optional[str] = None,
    ax: Optional[plt.Axes] = None
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Histogram of bootstrap resample means with the interval marked.

    Parameters
    ----------
    result : BootstrapResult
        Output of ``bootstrap_distribution``.
    bins : int, optional
        Number of histogram bins. Default is 30.
    figsize : tuple, optional
        Figure size in inches, used when ``ax`` is None.
    title : str, optional
        Plot title.
    save_path : str, optional
        Path to save the figure. If None, figure is not saved.
    ax : plt.Axes, optional
        Existing axes to plot on. If None, creates new figure.

    Returns
    -------
    fig : plt.Figure
        Matplotlib figure object.
    ax : plt.Axes
        Matplotlib axes object.
    """
    fig, ax = _figure_and_axes(ax, figsize)

    if len(result.means) > 0:
        sns.histplot(result.means, bins=bins, color=DEFAULT_COLORS['secondary'],
                     alpha=0.7, ax=ax)
        ax.axvline(result.lower, color=DEFAULT_COLORS['primary'], linestyle='--',
                   label=f'{result.lower_quantile:.1%} quantile')
        ax.axvline(result.upper, color=DEFAULT_COLORS['primary'], linestyle='--',
                   label=f'{result.upper_quantile:.1%} quantile')
        ax.axvline(result.mean, color=DEFAULT_COLORS['tertiary'],
                   label='bootstrap mean')
        ax.legend(loc='best', fontsize=DEFAULT_FONTSIZE['legend'], frameon=False)

    ax.set_xlabel('Mean predicted spending', fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_ylabel('Resamples', fontsize=DEFAULT_FONTSIZE['label'])
    if title:
        ax.set_title(title, fontsize=DEFAULT_FONTSIZE['title'], fontweight='bold')

    _apply_base_style(ax)

    if save_path:
        fig.savefig(save_path, dpi=DEFAULT_DPI, bbox_inches='tight')

    return fig, ax


def plot_fold_predictions(
    predictions: pd.DataFrame,
    observed: Optional[pd.Series] = None,
    figsize: Tuple[int, int] = DEFAULT_FIGSIZE,
    title: Optional[str] = 'Out-of-fold predictions',
    save_path: Optional[str] = None,
    ax: Optional[plt.Axes] = None
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Box plot of out-of-fold predictions per fold.

    Parameters
    ----------
    predictions : pd.DataFrame
        Output of ``cross_validate`` ('pred' and 'fold' columns).
    observed : pd.Series, optional
        Observed target values indexed like the dataset. When given, the
        observed mean of each fold is overlaid.
    figsize : tuple, optional
        Figure size in inches, used when ``ax`` is None.
    title : str, optional
        Plot title.
    save_path : str, optional
        Path to save the figure. If None, figure is not saved.
    ax : plt.Axes, optional
        Existing axes to plot on. If None, creates new figure.

    Returns
    -------
    fig : plt.Figure
        Matplotlib figure object.
    ax : plt.Axes
        Matplotlib axes object.
    """
    fig, ax = _figure_and_axes(ax, figsize)

    plot_data = predictions.dropna(subset=['pred']).sort_values('fold', kind='stable')
    folds = sorted(plot_data['fold'].unique())

    sns.boxplot(data=plot_data, x='fold', y='pred', order=folds,
                color=DEFAULT_COLORS['secondary'], ax=ax)

    if observed is not None:
        observed_means = [
            np.nanmean(observed.loc[plot_data.index[plot_data['fold'] == fold]])
            for fold in folds
        ]
        ax.scatter(range(len(folds)), observed_means, color=DEFAULT_COLORS['primary'],
                   marker='D', zorder=3, label='observed mean')
        ax.legend(loc='best', fontsize=DEFAULT_FONTSIZE['legend'], frameon=False)

    ax.set_xlabel('Fold', fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_ylabel('Predicted spending', fontsize=DEFAULT_FONTSIZE['label'])
    if title:
        ax.set_title(title, fontsize=DEFAULT_FONTSIZE['title'], fontweight='bold')

    _apply_base_style(ax, grid=True)

    if save_path:
        fig.savefig(save_path, dpi=DEFAULT_DPI, bbox_inches='tight')

    return fig, ax
