import numpy as np
import pandas as pd
import pytest

from ml_model.data import COLUMNS, clean_data
from ml_model.training import fit_served_model


def make_survey(n=3000, seed=2015):
    """BRFSS-shaped frame where the six API inputs raise the diabetes risk."""
    rng = np.random.default_rng(seed)

    def flag(p):
        return rng.binomial(1, p, n).astype(float)

    df = pd.DataFrame({
        "HighBP": flag(0.43),
        "HighChol": flag(0.42),
        "CholCheck": flag(0.96),
        "BMI": rng.normal(28, 6, n).round().clip(12, 98),
        "Smoker": flag(0.44),
        "Stroke": flag(0.08),
        "HeartDiseaseorAttack": flag(0.10),
        "PhysActivity": flag(0.75),
        "Fruits": flag(0.63),
        "Veggies": flag(0.81),
        "HvyAlcoholConsump": flag(0.06),
        "AnyHealthcare": flag(0.95),
        "NoDocbcCost": flag(0.08),
        "GenHlth": rng.integers(1, 6, n).astype(float),
        "MentHlth": rng.integers(0, 31, n).astype(float),
        "PhysHlth": rng.integers(0, 31, n).astype(float),
        "DiffWalk": flag(0.17),
        "Sex": flag(0.44),
        "Age": rng.integers(1, 14, n).astype(float),
        "Education": rng.integers(1, 7, n).astype(float),
        "Income": rng.integers(1, 9, n).astype(float),
    })

    logit = (
        -3.2
        + 1.0 * df["HighBP"]
        + 0.7 * df["HighChol"]
        + 0.08 * (df["BMI"] - 28)
        + 0.9 * df["Stroke"]
        + 0.8 * df["HeartDiseaseorAttack"]
        + 0.7 * df["DiffWalk"]
    )
    df["Diabetes_binary"] = rng.binomial(1, 1 / (1 + np.exp(-logit))).astype(float)
    return df[COLUMNS]


@pytest.fixture(scope="session")
def raw_survey():
    return make_survey()


@pytest.fixture(scope="session")
def survey(raw_survey):
    return clean_data(raw_survey)


@pytest.fixture
def survey_csv(raw_survey, tmp_path):
    path = tmp_path / "diabetes_binary_health_indicators_BRFSS2015.csv"
    raw_survey.to_csv(path, index=False)
    return path


@pytest.fixture(scope="session")
def served_model(survey):
    return fit_served_model(survey)
