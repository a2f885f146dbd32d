# =========================================================
# BRFSS 2015 DIABETES HEALTH INDICATORS
# LOADING + CLEANING
# =========================================================

import logging

import pandas as pd
from pandas.api.types import is_numeric_dtype

log = logging.getLogger(__name__)

RESPONSE = "Diabetes_binary"
POSITIVE_LABEL = "yes"
NEGATIVE_LABEL = "no"

COLUMNS = [
    "Diabetes_binary", "HighBP", "HighChol", "CholCheck", "BMI", "Smoker",
    "Stroke", "HeartDiseaseorAttack", "PhysActivity", "Fruits", "Veggies",
    "HvyAlcoholConsump", "AnyHealthcare", "NoDocbcCost", "GenHlth",
    "MentHlth", "PhysHlth", "DiffWalk", "Sex", "Age", "Education", "Income",
]

# Predictors of the simplest model, the one the API serves
SIMPLE_PREDICTORS = ["HighBP", "HighChol", "BMI", "Stroke", "HeartDiseaseorAttack", "DiffWalk"]

NUMERIC_MEASURES = ["BMI", "MentHlth", "PhysHlth"]


# ---------------------------------------------------------
# Codebook labels for the ordinal columns
# ---------------------------------------------------------

AGE_LABELS = {
    1: "18-24", 2: "25-29", 3: "30-34", 4: "35-39", 5: "40-44",
    6: "45-49", 7: "50-54", 8: "55-59", 9: "60-64", 10: "65-69",
    11: "70-74", 12: "75-79", 13: "80 or older",
}

EDUCATION_LABELS = {
    1: "Never attended school or only kindergarten",
    2: "Elementary",
    3: "Some high school",
    4: "High school graduate",
    5: "Some college or technical school",
    6: "College graduate",
}

INCOME_LABELS = {
    1: "Less than $10,000",
    2: "$10,000 to $15,000",
    3: "$15,000 to $20,000",
    4: "$20,000 to $25,000",
    5: "$25,000 to $35,000",
    6: "$35,000 to $50,000",
    7: "$50,000 to $75,000",
    8: "$75,000 or more",
}

GENHLTH_LABELS = {
    1: "Excellent", 2: "Very good", 3: "Good", 4: "Fair", 5: "Poor",
}

LABEL_MAPS = {
    "Age": AGE_LABELS,
    "Education": EDUCATION_LABELS,
    "Income": INCOME_LABELS,
    "GenHlth": GENHLTH_LABELS,
}

CATEGORICAL_PREDICTORS = list(LABEL_MAPS)
INDICATORS = [c for c in COLUMNS
              if c != RESPONSE and c not in NUMERIC_MEASURES and c not in CATEGORICAL_PREDICTORS]
PREDICTORS = [c for c in COLUMNS if c != RESPONSE]


def load_data(path):
    """Read the survey CSV, keeping the schema columns in schema order.

    A missing file raises FileNotFoundError (from pandas); a header without
    every schema column raises ValueError.
    """
    df = pd.read_csv(path)
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing required columns: {', '.join(missing)}")

    log.info("Loaded %s rows from %s", len(df), path)
    return df[COLUMNS]


def clean_data(df):
    """Relabel the coded columns and recode the response as "no"/"yes"."""
    df = df.copy()

    df[RESPONSE] = pd.Categorical(
        df[RESPONSE].map({1: POSITIVE_LABEL, 0: NEGATIVE_LABEL}),
        categories=[NEGATIVE_LABEL, POSITIVE_LABEL],
    )

    for col, labels in LABEL_MAPS.items():
        # Codes outside the table become NaN
        df[col] = pd.Categorical(
            df[col].map(labels),
            categories=list(labels.values()),
            ordered=True,
        )

    for col in df.columns:
        if not is_numeric_dtype(df[col]) and not isinstance(df[col].dtype, pd.CategoricalDtype):
            df[col] = df[col].astype("category")

    return df


# ---------------------------------------------------------
# Default inputs: mean for measures, mode for the rest
# ---------------------------------------------------------

def summarize_column(series):
    if is_numeric_dtype(series) and series.nunique() > 2:
        return float(series.mean())
    return series.value_counts().idxmax()


def input_defaults(df, columns=None):
    if columns is None:
        columns = list(df.columns)
    return {col: summarize_column(df[col]) for col in columns}
