# =========================================================
# SPLIT, RESAMPLING AND MODEL TRAINERS
# =========================================================

import logging
import time
from typing import NamedTuple

import numpy as np
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.model_selection import GridSearchCV, StratifiedKFold, train_test_split
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder
from sklearn.tree import DecisionTreeClassifier

from ml_model.data import LABEL_MAPS, POSITIVE_LABEL, PREDICTORS, RESPONSE, SIMPLE_PREDICTORS

log = logging.getLogger(__name__)

SCORING = "neg_log_loss"

# Complexity parameter (cost-complexity pruning) candidates
TREE_GRID = {"model__ccp_alpha": [0.0, 0.0001, 0.0005, 0.001, 0.005, 0.01]}

# mtry candidates, counted on the one-hot encoded design
FOREST_GRID = {"model__max_features": [2, 4, 7, 10]}


class TrainedModel(NamedTuple):
    name: str
    model: Pipeline
    cv_log_loss: float
    best_params: dict


# ---------------------------------------------------------
# Split + cross-validation scheme
# ---------------------------------------------------------

def split_data(df, test_size=0.3, random_state=42):
    X = df[PREDICTORS]
    y = df[RESPONSE]
    return train_test_split(
        X, y,
        test_size=test_size,
        stratify=y,
        random_state=random_state,
    )


def make_cv(n_splits=5, random_state=42):
    return StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=random_state)


# ---------------------------------------------------------
# Pipelines
# ---------------------------------------------------------

def make_preprocessor(features):
    """One-hot encode the relabelled categoricals, pass numeric columns through."""
    categorical = [c for c in features if c in LABEL_MAPS]
    numeric = [c for c in features if c not in LABEL_MAPS]

    transformers = []
    if categorical:
        encoder = OneHotEncoder(
            categories=[list(LABEL_MAPS[c].values()) for c in categorical],
            drop="first",
            handle_unknown="ignore",
            sparse_output=False,
        )
        transformers.append(("cat", encoder, categorical))
    if numeric:
        transformers.append(("num", "passthrough", numeric))

    return ColumnTransformer(transformers, remainder="drop")


def maximum_likelihood_logit():
    """Unpenalised logistic regression solved by Newton steps to a tight gradient tolerance."""
    return LogisticRegression(C=np.inf, solver="newton-cholesky", tol=1e-10, max_iter=100)


def logistic_pipeline(features=None):
    if features is None:
        features = PREDICTORS
    return Pipeline([
        ("prep", make_preprocessor(features)),
        ("model", maximum_likelihood_logit()),
    ])


def tree_pipeline(random_state=42):
    return Pipeline([
        ("prep", make_preprocessor(PREDICTORS)),
        ("model", DecisionTreeClassifier(random_state=random_state)),
    ])


def forest_pipeline(n_estimators=100, random_state=42):
    return Pipeline([
        ("prep", make_preprocessor(PREDICTORS)),
        ("model", RandomForestClassifier(
            n_estimators=n_estimators,
            random_state=random_state,
            n_jobs=-1,
        )),
    ])


# ---------------------------------------------------------
# Uniform training wrapper
# ---------------------------------------------------------

def train_model(name, estimator, param_grid, X, y, cv):
    """Tune ``estimator`` over ``param_grid`` by cross-validated log loss.

    The best candidate is refit on all of ``X``. Returns a TrainedModel whose
    ``cv_log_loss`` is the mean validation log loss of that candidate.
    """
    t0 = time.perf_counter()
    search = GridSearchCV(estimator, param_grid or {}, scoring=SCORING, cv=cv, refit=True)
    search.fit(X, y)

    cv_log_loss = -float(search.best_score_)
    log.info("%s: cv log loss=%.4f params=%s (%.1fs)",
             name, cv_log_loss, search.best_params_, time.perf_counter() - t0)

    return TrainedModel(name, search.best_estimator_, cv_log_loss, search.best_params_)


def train_all(X, y, cv, n_estimators=100, random_state=42, tree_grid=None, forest_grid=None):
    """Train the four compared models, keyed by name."""
    if tree_grid is None:
        tree_grid = TREE_GRID
    if forest_grid is None:
        forest_grid = FOREST_GRID

    candidates = [
        ("logreg_simple", logistic_pipeline(SIMPLE_PREDICTORS), {}),
        ("logreg_full", logistic_pipeline(PREDICTORS), {}),
        ("classification_tree", tree_pipeline(random_state), tree_grid),
        ("random_forest", forest_pipeline(n_estimators, random_state), forest_grid),
    ]

    trained = {}
    for name, estimator, grid in candidates:
        trained[name] = train_model(name, estimator, grid, X, y, cv)
    return trained


# ---------------------------------------------------------
# Served model
# ---------------------------------------------------------

def fit_served_model(df):
    """Maximum-likelihood logistic fit of the six predictors on every row."""
    model = maximum_likelihood_logit()
    model.fit(df[SIMPLE_PREDICTORS], df[RESPONSE])
    log.info("Served model fitted on %s rows: intercept=%.4f", len(df), model.intercept_[0])
    return model


def predict_positive(model, X):
    """Probability of the positive ("yes") class for each row of ``X``."""
    idx = list(model.classes_).index(POSITIVE_LABEL)
    return model.predict_proba(X)[:, idx]
