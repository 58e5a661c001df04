"""Allure reporting helpers."""

from __future__ import annotations

import json
from typing import Any

import allure


def attach_text(name: str, body: str) -> None:
    allure.attach(body, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_json(name: str, payload: Any) -> None:
    body = json.dumps(payload, indent=2, sort_keys=True, default=str)
    allure.attach(body, name=name, attachment_type=allure.attachment_type.JSON)
