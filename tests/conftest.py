"""Shared fixtures for swing-trends tests."""

import pytest

from samples import blast_csv, hittrax_csv


@pytest.fixture
def blast_content() -> bytes:
    return blast_csv(
        "2024-01-02 10:00:00,Bat,Right,Tee,64.0,10",
        "2024-01-01,Bat,Right,Tee,62.5,8",
        "2024-01-02 10:05:00,Bat,Right,Tee,66.0,12",
    ).encode("utf-8")


@pytest.fixture
def hittrax_content() -> bytes:
    return hittrax_csv(
        "2024-01-01,10:00:00,70,80,250,A",
        "2024-01-01,10:05:00,80,90,300,",
        "2024-01-08,09:00:00,85,95,320,B",
    ).encode("utf-8")
