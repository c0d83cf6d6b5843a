"""Unit test fixtures - small in-memory corpora"""

import pytest


@pytest.fixture
def scenario_records():
    """Three documents where 1 and 3 are about search"""
    return [
        {"title": "Document 1", "content": "search algorithms"},
        {"title": "Document 2", "content": "machine learning"},
        {"title": "Document 3", "content": "advanced search techniques"},
    ]


@pytest.fixture
def people():
    return [
        {"name": "John Doe", "id": 1},
        {"name": "Jane Smith", "id": 2},
        {"name": "Johnny Cash", "id": 3},
    ]


@pytest.fixture
def issues():
    """Jira-like nested issue payloads"""
    return [
        {
            "key": "OPS-1",
            "fields": {
                "summary": "Kubernetes deployment fails on rollout",
                "labels": ["kubernetes", "deployment"],
                "priority": {"name": "High"},
                "votes": 3,
            },
        },
        {
            "key": "OPS-2",
            "fields": {
                "summary": "Update billing dashboard colors",
                "labels": ["frontend"],
                "priority": {"name": "Low"},
                "votes": 0,
            },
        },
        {
            "key": "OPS-3",
            "fields": {
                "summary": "Blue-green deployment strategy for payments",
                "labels": ["deployment"],
                "priority": {"name": "Medium"},
                "votes": 7,
            },
        },
    ]
