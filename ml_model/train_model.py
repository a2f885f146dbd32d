# =========================================================
# DIABETES HEALTH INDICATORS
# MODEL COMPARISON + SERVED MODEL
# LOGISTIC REGRESSION • CLASSIFICATION TREE • RANDOM FOREST
# =========================================================

import logging
from pathlib import Path

import joblib

from ml_model.config import settings
from ml_model.data import RESPONSE, clean_data, load_data
from ml_model.evaluate import evaluate_models, select_best
from ml_model.training import fit_served_model, make_cv, split_data, train_all


def main():
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )

    print("=" * 60)
    print("DIABETES MODEL COMPARISON")
    print("=" * 60)

    # ---------------------------------------------------------
    # STEP 1 - Load + Clean Dataset
    # ---------------------------------------------------------

    data = clean_data(load_data(settings.DATA_PATH))

    print("\nDataset Loaded:", data.shape)
    print("Class Distribution:\n", data[RESPONSE].value_counts(sort=False))

    # ---------------------------------------------------------
    # STEP 2 - Train Test Split (70/30, stratified)
    # ---------------------------------------------------------

    X_train, X_test, y_train, y_test = split_data(
        data,
        test_size=settings.TEST_SIZE,
        random_state=settings.RANDOM_STATE,
    )

    print(f"\nTrain rows: {len(X_train)}  Test rows: {len(X_test)}")

    # ---------------------------------------------------------
    # STEP 3 - Cross Validation + Training
    # ---------------------------------------------------------

    cv = make_cv(settings.CV_FOLDS, settings.RANDOM_STATE)

    trained = train_all(
        X_train, y_train, cv,
        n_estimators=settings.N_ESTIMATORS,
        random_state=settings.RANDOM_STATE,
    )

    print("\n" + "=" * 40)
    print(f"{settings.CV_FOLDS}-FOLD CV LOG LOSS")
    print("=" * 40)

    for result in trained.values():
        print(f"{result.name:<22} {result.cv_log_loss:.4f}  {result.best_params}")

    # ---------------------------------------------------------
    # STEP 4 - Evaluation on the held-out 30%
    # ---------------------------------------------------------

    ranking = evaluate_models(
        {name: result.model for name, result in trained.items()},
        X_test, y_test,
    )
    best = select_best(ranking)

    print("\n" + "=" * 40)
    print("TEST LOG LOSS")
    print("=" * 40)
    print(ranking.to_string(index=False))
    print("\nBest model:", best)

    # ---------------------------------------------------------
    # STEP 5 - Fit served model on all rows + Save (for Flask)
    # ---------------------------------------------------------

    model = fit_served_model(data)

    model_path = Path(settings.MODEL_PATH)
    model_path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model, model_path)

    print("\n✅ Saved:", model_path)
    print("\n🎉 TRAINING COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
