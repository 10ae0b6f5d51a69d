"""
Shared sample inputs: a trimmed API description and its signature table
"""

import json
import copy
from pathlib import Path

import pytest

from bindkit.introspection import parse_description, parse_signature_table


SAMPLE_API = [
    {
        "name": "Page",
        "comment": (
            "Page provides methods to interact with a single tab.\n\n"
            "- extends: [EventEmitter]\n\n"
            "**Usage**\n\n"
            "```js\nconst page = await browser.newPage();\n```\n\n"
            "**Details**\n\n"
            "See [`method: Page.goto`] for navigation."
        ),
        "members": [
            {
                "kind": "method",
                "name": "$eval",
                "comment": "**Usage**\nSee examples.\n```js\nconsole.log(1)\n```\n",
                "args": [
                    {"name": "selector", "type": {"name": "string"}, "required": True},
                    {"name": "script", "type": {"name": "string"}, "required": True},
                ],
                "type": {"name": "Serializable"},
            },
            {
                "kind": "method",
                "name": "goto",
                "comment": "Navigates to the given url.",
                "args": [
                    {"name": "url", "type": {"name": "string"}, "required": True},
                    {
                        "name": "options",
                        "required": False,
                        "type": {
                            "name": "Object",
                            "properties": [
                                {"name": "timeout", "type": {"name": "float"}, "required": False,
                                 "comment": "Maximum operation time in milliseconds."},
                                {"name": "waitUntil", "required": False, "type": {
                                    "name": "union",
                                    "union": [{"name": "\"load\""}, {"name": "\"domcontentloaded\""}],
                                }},
                                {"name": "referer", "type": {"name": "string"}, "required": False},
                            ],
                        },
                    },
                ],
            },
            {
                "kind": "method",
                "name": "pdf",
                "comment": "Returns the PDF buffer.",
                "args": [
                    {
                        "name": "options",
                        "required": False,
                        "type": {
                            "name": "Object",
                            "properties": [
                                {"name": "path", "type": {"name": "path"}, "required": False},
                                {"name": "margin", "required": False, "type": {
                                    "name": "Object",
                                    "properties": [
                                        {"name": "top", "type": {"name": "string"}, "required": False},
                                        {"name": "bottom", "type": {"name": "string"}, "required": False},
                                    ],
                                }},
                                {"name": "format", "type": {"name": "string"}, "required": False},
                            ],
                        },
                    },
                ],
            },
            {
                "kind": "method",
                "name": "close",
                "comment": "Closes the page.",
                "args": [
                    {
                        "name": "options",
                        "required": False,
                        "type": {
                            "name": "Object",
                            "properties": [
                                {"name": "runBeforeUnload", "type": {"name": "boolean"}, "required": False},
                                {"name": "reason", "type": {"name": "string"}, "required": False},
                            ],
                        },
                    },
                ],
            },
            {
                "kind": "method",
                "name": "click",
                "comment": "Clicks an element matching the selector.",
                "deprecated": "Use locator-based [`method: Locator.click`] instead.",
                "args": [
                    {"name": "selector", "type": {"name": "string"}, "required": True},
                    {
                        "name": "options",
                        "required": False,
                        "type": {
                            "name": "Object",
                            "properties": [
                                {"name": "button", "required": False, "type": {
                                    "name": "union",
                                    "union": [{"name": "\"left\""}, {"name": "\"right\""}, {"name": "\"middle\""}],
                                }},
                                {"name": "clickCount", "type": {"name": "int"}, "required": False},
                                {"name": "position", "required": False, "type": {
                                    "name": "Object",
                                    "properties": [
                                        {"name": "x", "type": {"name": "float"}, "required": True},
                                        {"name": "y", "type": {"name": "float"}, "required": True},
                                    ],
                                }},
                                {"name": "strict", "type": {"name": "boolean"}, "required": False,
                                 "langs": {"only": ["python"]}},
                            ],
                        },
                    },
                ],
            },
            {"kind": "method", "name": "url", "comment": "Returns the page URL.", "args": []},
            {"kind": "method", "name": "frameByUrl", "args": [
                {"name": "url", "type": {"name": "string"}, "required": True},
            ]},
            {"kind": "method", "name": "expectEvent", "args": [], "langs": {"only": ["python"]}},
            {
                "kind": "method",
                "name": "waitForTimeout",
                "comment": "Waits for the given timeout in milliseconds.",
                "discouraged": "Never wait for timeout in production.",
                "args": [{"name": "timeout", "type": {"name": "float"}, "required": True}],
            },
            {"kind": "event", "name": "close", "comment": "Emitted when the page closes."},
        ],
    },
    {
        "name": "BrowserContext",
        "comment": "BrowserContexts provide a way to operate multiple independent browser sessions.",
        "members": [
            {
                "kind": "method",
                "name": "setGeolocation",
                "comment": "Sets the context's geolocation.",
                "args": [
                    {"name": "geolocation", "required": False, "type": {
                        "name": "union",
                        "union": [
                            {"name": "null"},
                            {"name": "Object", "properties": [
                                {"name": "latitude", "type": {"name": "float"}, "required": True},
                                {"name": "longitude", "type": {"name": "float"}, "required": True},
                                {"name": "accuracy", "type": {"name": "float"}, "required": False},
                            ]},
                        ],
                    }},
                ],
            },
            {
                "kind": "method",
                "name": "setExtraHTTPHeaders",
                "args": [
                    {"name": "headers", "required": True, "type": {
                        "name": "Object",
                        "expression": "[Object]<[string], [string]>",
                        "templates": [{"name": "string"}, {"name": "string"}],
                    }},
                ],
            },
            {
                "kind": "method",
                "name": "route",
                "comment": "Routing provides the capability to modify network requests.",
                "args": [
                    {"name": "url", "type": {"name": "union", "union": [
                        {"name": "string"}, {"name": "RegExp"}, {"name": "function"},
                    ]}, "required": True},
                    {"name": "handler", "type": {"name": "function"}, "required": True},
                ],
            },
        ],
    },
    {
        "name": "ChromiumBrowser",
        "members": [{"kind": "method", "name": "startTracing", "args": []}],
    },
    {
        "name": "Android",
        "members": [{"kind": "method", "name": "devices", "args": []}],
    },
]


SAMPLE_SIGNATURES = {
    "Page": {
        "extends": ["EventEmitter"],
        "EvaluateOnSelector": ["selector string, script string", "interface{}, error"],
        "Goto": ["url string, options ...PageGotoOptions", "(Response, error)"],
        "PDF": ["options ...PagePDFOptions", "[]byte, error"],
        "Close": ["options ...PageCloseOptions", "error"],
        "Click": ["selector string, options ...PageClickOptions", "error"],
        "URL": ["", "string"],
        "WaitForTimeout": ["timeout float64", None],
    },
    "BrowserContext": {
        "SetGeolocation": ["geolocation *Geolocation", "error"],
        "SetExtraHTTPHeaders": ["headers map[string]string", "error"],
        "Route": ["url interface{}, handler func(Route), times ...int", "error"],
    },
}


@pytest.fixture
def raw_api():
    return copy.deepcopy(SAMPLE_API)


@pytest.fixture
def raw_signatures():
    return copy.deepcopy(SAMPLE_SIGNATURES)


@pytest.fixture
def tree(raw_api):
    return parse_description(raw_api)


@pytest.fixture
def table(raw_signatures):
    return parse_signature_table(raw_signatures)


@pytest.fixture
def api_file(tmp_path: Path, raw_api) -> Path:
    path = tmp_path / "api.json"
    path.write_text(json.dumps(raw_api, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def signatures_file(tmp_path: Path, raw_signatures) -> Path:
    path = tmp_path / "interfaces.json"
    path.write_text(json.dumps(raw_signatures, indent=2), encoding="utf-8")
    return path
