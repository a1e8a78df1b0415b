"""Measurement ingestion pipeline.

This package reads delimited measurement files and classifies each line.
It produces immutable measurement records for the aggregation layer.
"""
