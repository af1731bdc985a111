"""
Global test fixtures for jsmsg-export tests.

Provides message factories, sample JavaScript sources and PHP output files
with content regions.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from jsmsg_export.messages.models import Message, Part

MessageFactory = Callable[..., Message]

PHP_TEMPLATE = """<?php
// Generated translations for the JavaScript runtime.
/* START CONTENT */
$translations = array();
/* END CONTENT */

return $translations;
"""

SAMPLE_JS = """goog.provide('app.messages');

/** @desc Greeting shown on the dashboard. */
const MSG_HELLO = goog.getMsg('Hello {$userName}!', {'userName': name});

/**
 * @desc Label of the save button,
 *     shown in every form.
 * @meaning verb
 */
app.messages.MSG_SAVE = goog.getMsg('Save');

// var MSG_COMMENTED_OUT = goog.getMsg('Never extracted');
"""


@pytest.fixture
def make_message() -> MessageFactory:
    """
    Create a factory for Message instances.

    String items in ``parts`` become literals; ``("ph", name)`` tuples
    become placeholders.

    Returns:
        MessageFactory: Callable building a Message
    """

    def factory(
        id: str = "1",
        key: str = "MSG_TEST",
        description: str = "",
        parts: list[str | tuple[str, str]] | None = None,
    ) -> Message:
        built: list[Part] = []
        for item in parts if parts is not None else ["text"]:
            if isinstance(item, tuple):
                built.append(Part.placeholder(item[1]))
            else:
                built.append(Part.literal(item))
        return Message(id=id, key=key, description=description, parts=tuple(built))

    return factory


@pytest.fixture
def php_output(tmp_path: Path) -> Path:
    """
    Create a PHP output file containing one content region.

    Returns:
        Path: Path to the PHP file
    """
    output = tmp_path / "javascript-runtime.php"
    _ = output.write_text(PHP_TEMPLATE, encoding="utf-8")
    return output


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    """
    Create a small JavaScript source tree.

    Layout::

        js/classes/app.js           (MSG_HELLO, MSG_SAVE)
        js/classes/livechat/chat.js (MSG_CHAT)

    Returns:
        Path: The project root directory
    """
    classes = tmp_path / "js" / "classes"
    livechat = classes / "livechat"
    livechat.mkdir(parents=True)

    _ = (classes / "app.js").write_text(SAMPLE_JS, encoding="utf-8")
    _ = (livechat / "chat.js").write_text(
        "/** @desc Chat window title. */\nvar MSG_CHAT = goog.getMsg('Chat');\n",
        encoding="utf-8",
    )
    return tmp_path
