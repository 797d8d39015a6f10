"""Models module for Super Bowl analysis."""
import logging
from typing import Dict

import pandas as pd

from .classifier import fit_knn
from .report import ModelReport
from .statistical import fit_logit, fit_ols, run_anova, stepwise_select

logger = logging.getLogger(__name__)

MODEL_STAGES = {
    "ols": fit_ols,
    "logit": fit_logit,
    "anova": run_anova,
    "stepwise": stepwise_select,
    "knn": fit_knn,
}


def run_all_models(df: pd.DataFrame) -> Dict[str, ModelReport]:
    """Fit every model stage independently; skipped stages are reported, not raised."""
    reports = {name: stage(df) for name, stage in MODEL_STAGES.items()}
    skipped = [name for name, report in reports.items() if not report.ok]
    if skipped:
        logger.warning("Skipped model stage(s): %s", ", ".join(skipped))
    return reports


__all__ = ['ModelReport', 'fit_ols', 'fit_logit', 'run_anova', 'stepwise_select',
           'fit_knn', 'run_all_models', 'MODEL_STAGES']
