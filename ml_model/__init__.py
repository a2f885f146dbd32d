"""
Diabetes health indicators: data cleaning, EDA, model training and comparison.
"""
