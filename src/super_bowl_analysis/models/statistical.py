"""
Classical statistical models over the merged Super Bowl table.

All fits use the statsmodels formula API:

* OLS          Pts ~ RushYards + C(SackedYards)
* Logit        Win ~ RushYards + C(SackedYards)
* ANOVA        Pts ~ C(SackedYards)   (type II, checked against scipy's f_oneway)
* Stepwise     bidirectional AIC search over the OLS terms
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from scipy import stats

from src.super_bowl_analysis.config import config
from src.super_bowl_analysis.models.report import ModelReport

logger = logging.getLogger(__name__)

_SACKED_TERM = "C(SackedYards)"


# ───────────────────────── helpers ─────────────────────────
def _model_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Copy with SackedYards as plain strings so patsy only sees observed levels."""
    frame = df.copy()
    frame["SackedYards"] = frame["SackedYards"].astype(str)
    return frame


def predictor_terms(df: pd.DataFrame, terms: Optional[Sequence[str]] = None) -> List[str]:
    """
    Formula terms usable on ``df``.

    The SackedYards factor is dropped when only one level is observed.
    """
    terms = list(config.PREDICTOR_TERMS if terms is None else terms)
    if _SACKED_TERM in terms and df["SackedYards"].nunique() < 2:
        logger.warning("SackedYards has one observed level; dropping %s from the formula", _SACKED_TERM)
        terms.remove(_SACKED_TERM)
    return terms


def build_formula(target: str, terms: Sequence[str]) -> str:
    """Patsy formula ``target ~ a + b``; an intercept-only model when ``terms`` is empty."""
    return f"{target} ~ {' + '.join(terms) if terms else '1'}"


# ───────────────────────── models ─────────────────────────
def fit_ols(df: pd.DataFrame, target: str = config.OLS_TARGET) -> ModelReport:
    """Ordinary least squares of points on rush yards and the sacked-yards factor."""
    name = "ols"
    if len(df) < 2:
        return ModelReport.skipped(name, "fewer than two rows")

    formula = build_formula(target, predictor_terms(df))
    result = smf.ols(formula, data=_model_frame(df)).fit()
    logger.info("OLS %s → R² = %.3f", formula, result.rsquared)
    return ModelReport(
        name=name,
        summary=str(result.summary()),
        metrics={
            "r_squared": float(result.rsquared),
            "adj_r_squared": float(result.rsquared_adj),
            "f_pvalue": float(result.f_pvalue),
            "aic": float(result.aic),
            "nobs": float(result.nobs),
        },
        details={"formula": formula},
        result=result,
    )


def fit_logit(df: pd.DataFrame, target: str = config.LOGIT_TARGET) -> ModelReport:
    """
    Logistic regression of the win indicator on the OLS predictors.

    Win is constant whenever every row comes from the winner-keyed join, in
    which case the fit is reported as insufficient data.
    """
    name = "logit"
    if df[target].nunique() < 2:
        logger.warning("%s has a single value (%s); logistic regression skipped",
                       target, df[target].unique().tolist())
        return ModelReport.skipped(name, f"{target} has fewer than two distinct values")

    formula = build_formula(target, predictor_terms(df))
    result = smf.logit(formula, data=_model_frame(df)).fit(disp=0)
    logger.info("Logit %s → pseudo R² = %.3f", formula, result.prsquared)
    return ModelReport(
        name=name,
        summary=str(result.summary()),
        metrics={
            "pseudo_r_squared": float(result.prsquared),
            "llr_pvalue": float(result.llr_pvalue),
            "aic": float(result.aic),
            "nobs": float(result.nobs),
        },
        details={"formula": formula},
        result=result,
    )


def run_anova(df: pd.DataFrame, target: str = config.OLS_TARGET) -> ModelReport:
    """One-way ANOVA of points grouped by sacked-yards level."""
    name = "anova"
    frame = _model_frame(df)
    groups = [grp[target].to_numpy(dtype=float) for _, grp in frame.groupby("SackedYards")]
    if len(groups) < 2:
        return ModelReport.skipped(name, "SackedYards has fewer than two observed levels")

    formula = build_formula(target, [_SACKED_TERM])
    model = smf.ols(formula, data=frame).fit()
    table = sm.stats.anova_lm(model, typ=2)
    f_stat, p_value = stats.f_oneway(*groups)

    row = table.loc[_SACKED_TERM]
    logger.info("ANOVA %s → F = %.3f, p = %.4f", formula, row["F"], row["PR(>F)"])
    summary = (
        f"One-way ANOVA: {formula}\n"
        f"{table.to_string()}\n\n"
        f"scipy f_oneway: F = {f_stat:.4f}, p = {p_value:.4g} ({len(groups)} groups)"
    )
    return ModelReport(
        name=name,
        summary=summary,
        metrics={
            "f_statistic": float(row["F"]),
            "p_value": float(row["PR(>F)"]),
            "f_oneway_statistic": float(f_stat),
            "f_oneway_p_value": float(p_value),
            "groups": float(len(groups)),
        },
        details={"formula": formula, "table": table},
        result=model,
    )


def stepwise_select(
    df: pd.DataFrame,
    target: str = config.OLS_TARGET,
    terms: Optional[Sequence[str]] = None,
) -> ModelReport:
    """
    Bidirectional stepwise selection by AIC, starting from the full model.

    Each step tries dropping every included term and adding every excluded
    one, and takes the move with the lowest AIC while AIC keeps falling.
    """
    name = "stepwise"
    if len(df) < 2:
        return ModelReport.skipped(name, "fewer than two rows")

    frame = _model_frame(df)
    candidates = predictor_terms(df, terms)

    def _aic(selected: Sequence[str]) -> float:
        return smf.ols(build_formula(target, selected), data=frame).fit().aic

    current = list(candidates)
    best_aic = _aic(current)
    steps: List[Tuple[str, str, float]] = [("start", build_formula(target, current), best_aic)]

    while True:
        moves = [("-", term, _aic([t for t in current if t != term])) for term in current]
        moves += [("+", term, _aic(current + [term])) for term in candidates if term not in current]
        if not moves:
            break
        op, term, aic = min(moves, key=lambda move: move[2])
        if aic >= best_aic:
            break
        current = [t for t in current if t != term] if op == "-" else current + [term]
        best_aic = aic
        steps.append((f"{op} {term}", build_formula(target, current), aic))

    final_formula = build_formula(target, current)
    result = smf.ols(final_formula, data=frame).fit()
    logger.info("Stepwise selection kept %s (AIC %.2f)", current or ["intercept"], best_aic)

    trace = "\n".join(f"{step:<22} AIC={aic:10.3f}  {formula}" for step, formula, aic in steps)
    return ModelReport(
        name=name,
        summary=f"Stepwise (AIC) path:\n{trace}\n\n{result.summary()}",
        metrics={"aic": float(result.aic), "n_terms": float(len(current))},
        details={"selected": current, "steps": steps, "formula": final_formula},
        result=result,
    )
