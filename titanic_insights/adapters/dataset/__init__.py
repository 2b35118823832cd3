"""Passenger manifest loaders.

- csv_loader: Kaggle ``train.csv`` layout, read with pandas
"""
