"""
Nearest-neighbour classifier for the win indicator.
Uses a stratified train/test split and a cross-validated search over k.
"""
from __future__ import annotations

import logging
import math
from typing import Dict

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, f1_score
from sklearn.model_selection import GridSearchCV, StratifiedKFold, train_test_split
from sklearn.neighbors import KNeighborsClassifier
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from src.super_bowl_analysis.config import config
from src.super_bowl_analysis.models.report import ModelReport

logger = logging.getLogger(__name__)


def make_knn_features(df: pd.DataFrame) -> pd.DataFrame:
    """Numeric design matrix: rush yards, third-down conversions and sacks taken."""
    sacked_count = pd.to_numeric(
        df["SackedYards"].astype(str).str.extract(r"^(\d+)", expand=False),
        errors="coerce",
    ).fillna(0)
    third_downs = df["ThirdDownConversions"] if "ThirdDownConversions" in df.columns else 0
    X = pd.DataFrame({
        "RushYards": df["RushYards"].astype(float),
        "ThirdDownConversions": third_downs,
        "SackedCount": sacked_count,
    }, index=df.index)
    return X[config.KNN_FEATURES].astype(float)


def neighbor_grid(n_train: int, folds: int, max_neighbors: int = config.KNN_MAX_NEIGHBORS) -> Dict[str, list]:
    """Odd k values that fit inside the smallest CV training fold."""
    smallest_fold = n_train - math.ceil(n_train / folds)
    upper = max(1, min(max_neighbors, smallest_fold))
    return {"knn__n_neighbors": list(range(1, upper + 1, 2))}


def fit_knn(df: pd.DataFrame, target: str = config.LOGIT_TARGET) -> ModelReport:
    """
    Fit a scaled k-NN classifier predicting ``target``.

    Preconditions (otherwise the stage reports insufficient data):
      - at least two distinct target values
      - at least two rows per class, enough for a stratified split and CV
    """
    name = "knn"
    y = df[target].astype(int)
    if y.nunique() < 2:
        logger.warning("%s has a single value; k-NN skipped", target)
        return ModelReport.skipped(name, f"{target} has fewer than two distinct values")

    class_counts = y.value_counts()
    n_classes = len(class_counts)
    n_test = math.ceil(config.TEST_SIZE * len(y))
    if class_counts.min() < 2 or n_test < n_classes or len(y) - n_test < n_classes:
        return ModelReport.skipped(name, "too few rows per class for a stratified split")

    X = make_knn_features(df)
    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=config.TEST_SIZE, stratify=y, random_state=config.RANDOM_STATE
    )

    folds = min(config.CV_FOLDS, int(y_train.value_counts().min()))
    if folds < 2:
        return ModelReport.skipped(name, "too few training rows per class for cross-validation")

    pipeline = Pipeline([
        ("scaler", StandardScaler()),
        ("knn", KNeighborsClassifier()),
    ])
    search = GridSearchCV(
        pipeline,
        param_grid=neighbor_grid(len(y_train), folds),
        cv=StratifiedKFold(n_splits=folds, shuffle=True, random_state=config.RANDOM_STATE),
        scoring="accuracy",
    )
    search.fit(X_train, y_train)

    y_pred = search.predict(X_test)
    best_k = int(search.best_params_["knn__n_neighbors"])
    metrics = {
        "best_n_neighbors": float(best_k),
        "cv_accuracy": float(search.best_score_),
        "test_accuracy": float(accuracy_score(y_test, y_pred)),
        "test_f1_macro": float(f1_score(y_test, y_pred, average="macro", zero_division=0)),
        "n_train": float(len(y_train)),
        "n_test": float(len(y_test)),
    }
    cm = confusion_matrix(y_test, y_pred, labels=np.sort(y.unique()))
    logger.info("k-NN best k = %d, CV accuracy = %.3f, test accuracy = %.3f",
                best_k, metrics["cv_accuracy"], metrics["test_accuracy"])

    summary = "\n".join([
        f"k-nearest neighbours on {', '.join(config.KNN_FEATURES)} → {target}",
        f"Best n_neighbors: {best_k} ({folds}-fold CV accuracy {metrics['cv_accuracy']:.3f})",
        f"Test accuracy: {metrics['test_accuracy']:.3f}   macro F1: {metrics['test_f1_macro']:.3f}",
        "Confusion matrix (rows = actual, cols = predicted):",
        str(cm),
    ])
    return ModelReport(
        name=name,
        summary=summary,
        metrics=metrics,
        details={"best_params": search.best_params_, "confusion_matrix": cm},
        result=search.best_estimator_,
    )
