import logging
import math

import pandas as pd
from flask import Flask, jsonify, request

from ml_model.config import settings
from ml_model.data import SIMPLE_PREDICTORS, clean_data, input_defaults, load_data
from ml_model.training import fit_served_model, predict_positive

INFO_TEXT = (
    "Student: Chris Aguilar; Assignment Github page: "
    "https://chris-aguilar.github.io/st_558_project3/EDA.html"
)

# Most common value of each input; BMI is the rounded mean
PRED_DEFAULTS = {
    "HighBP": 0,
    "HighChol": 0,
    "BMI": 28,
    "Stroke": 0,
    "HeartDiseaseorAttack": 0,
    "DiffWalk": 0,
}


# ==============================
# LOAD ML MODEL
# ==============================
def load_model(logger):
    """Read the survey file and refit the served model; a missing or malformed file is fatal."""
    logger.info("Fitting model on %s", settings.DATA_PATH)
    data = clean_data(load_data(settings.DATA_PATH))
    logger.info("Observed input summary: %s", input_defaults(data, SIMPLE_PREDICTORS))
    return fit_served_model(data)


def parse_inputs(args):
    """Coerce the query parameters to floats; returns (values, error)."""
    values = {}
    for name, default in PRED_DEFAULTS.items():
        raw = args.get(name)
        if raw is None:
            values[name] = float(default)
            continue
        try:
            value = float(raw)
        except ValueError:
            return None, f"{name} must be numeric, got {raw!r}"
        if not math.isfinite(value):
            return None, f"{name} must be a finite number, got {raw!r}"
        values[name] = value
    return values, None


def create_app(model=None):
    app = Flask(__name__)
    app.logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))

    if model is None:
        model = load_model(app.logger)
    app.config["MODEL"] = model

    # ==============================
    # ROUTES
    # ==============================

    @app.route("/info")
    def info():
        return jsonify(INFO_TEXT)

    @app.route("/pred")
    def pred():
        values, error = parse_inputs(request.args)
        if error:
            app.logger.warning("Rejected /pred input: %s", error)
            return jsonify({"error": error}), 400

        input_data = pd.DataFrame([values], columns=SIMPLE_PREDICTORS)
        prob = float(predict_positive(app.config["MODEL"], input_data)[0])
        return jsonify(prob)

    return app


# ==============================
# RUN
# ==============================
def main():
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [api] %(message)s",
    )
    app = create_app()
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)


if __name__ == "__main__":
    main()
