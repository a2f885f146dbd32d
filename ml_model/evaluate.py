import logging

import pandas as pd
from sklearn.metrics import log_loss

log = logging.getLogger(__name__)


def holdout_log_loss(model, X, y):
    proba = model.predict_proba(X)
    return float(log_loss(y, proba, labels=model.classes_))


def evaluate_models(models, X_test, y_test):
    """
    Score every fitted model on the held-out rows.

    ``models`` maps an identifier to a fitted classifier. Returns a frame
    with columns ``model`` and ``log_loss`` ranked ascending (ties keep
    the input order).
    """
    rows = []
    for name, model in models.items():
        loss = holdout_log_loss(model, X_test, y_test)
        log.info("%s: test log loss=%.4f", name, loss)
        rows.append({"model": name, "log_loss": loss})

    ranking = pd.DataFrame(rows, columns=["model", "log_loss"])
    return ranking.sort_values("log_loss", kind="stable").reset_index(drop=True)


def select_best(ranking):
    if ranking.empty:
        raise ValueError("no models to select from")
    return ranking.loc[0, "model"]
