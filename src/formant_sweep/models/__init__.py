"""Модели: структуры данных и алгоритмы развёртки."""
