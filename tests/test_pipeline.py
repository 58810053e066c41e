"""Tests for the translation pipeline."""

import asyncio
from types import SimpleNamespace

import pytest
from vtt_translator.exceptions import TranslationError
from vtt_translator.grouper import group_cues_into_sentences
from vtt_translator.parser import parse_vtt
from vtt_translator.pipeline import (
    apply_translations,
    summarize_groups,
    translate_cues,
    translate_groups,
    translate_vtt,
)
from vtt_translator.progress import TranslationProgress
from vtt_translator.translator import TranslationResult, make_translate_fn


class ScriptedClient:
    """Answers chat completions from a fixed source -> reply table."""

    def __init__(self, replies):
        self.replies = replies
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **params):
        message = SimpleNamespace(content=self.replies[params["messages"][-1]["content"]])
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


SAMPLE = """WEBVTT

00:00:01.000 --> 00:00:02.000
Hello there.

00:00:02.000 --> 00:00:04.000
World is big
and we are

00:00:04.000 --> 00:00:05.000
small.
"""


def make_translator(table, calls=None):
    async def translate(text, source, target):
        if calls is not None:
            calls.append((text, source, target))
        if text not in table:
            return TranslationResult(translated_text="", success=False, error=f"no entry for {text!r}")
        return TranslationResult(translated_text=table[text], success=True)
    return translate


TABLE = {
    "Hello there.": "Hola.",
    "World is big and we are small.": "El mundo es grande y nosotros pequeños.",
}


class TestTranslateGroups:

    def test_translates_each_group_once(self):
        groups = group_cues_into_sentences(parse_vtt(SAMPLE))
        calls = []
        result = asyncio.run(translate_groups(
            groups, make_translator(TABLE, calls), "en", "es", show_progress=False
        ))

        assert result == {0: "Hola.", 1: "El mundo es grande y nosotros pequeños."}
        assert sorted(calls) == sorted((text, "en", "es") for text in TABLE)

    def test_failure_raises(self):
        groups = group_cues_into_sentences(parse_vtt(SAMPLE))
        table = {"Hello there.": "Hola."}
        with pytest.raises(TranslationError) as exc_info:
            asyncio.run(translate_groups(groups, make_translator(table), "en", "es", show_progress=False))

        assert exc_info.value.group_index == 1

    def test_successful_groups_reported_before_failure(self):
        groups = group_cues_into_sentences(parse_vtt(SAMPLE))
        done = {}
        with pytest.raises(TranslationError):
            asyncio.run(translate_groups(
                groups, make_translator({"Hello there.": "Hola."}), "en", "es",
                on_group_done=done.__setitem__, show_progress=False,
            ))

        assert done == {0: "Hola."}

    def test_resume_skips_completed(self):
        groups = group_cues_into_sentences(parse_vtt(SAMPLE))
        progress = TranslationProgress.create("in.vtt", "en", "es", len(groups))
        progress.mark_completed(0, "Hola (guardado).")
        calls = []

        result = asyncio.run(translate_groups(
            groups, make_translator(TABLE, calls), "en", "es",
            progress=progress, show_progress=False,
        ))

        assert result[0] == "Hola (guardado)."
        assert [c[0] for c in calls] == ["World is big and we are small."]

    def test_with_tqdm(self):
        groups = group_cues_into_sentences(parse_vtt(SAMPLE))
        result = asyncio.run(translate_groups(groups, make_translator(TABLE), "en", "es", concurrency=1))
        assert len(result) == 2


class TestApplyTranslations:

    def test_redistributes_every_group(self):
        groups = group_cues_into_sentences(parse_vtt(SAMPLE))
        cues = apply_translations(groups, {0: "Hola.", 1: "uno dos tres cuatro cinco seis"})

        assert [c.original_index for c in cues] == [0, 1, 2]
        assert cues[0].text_lines == ["Hola."]
        assert cues[1].text_lines == ["uno dos tres", "cuatro cinco"]
        assert cues[2].text_lines == ["seis"]


class TestEndToEnd:

    def test_translate_vtt(self):
        out = asyncio.run(translate_vtt(SAMPLE, make_translator(TABLE), "en", "es"))

        assert out.startswith("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHola.")
        cues = parse_vtt(out)
        assert [(c.start, c.end) for c in cues] == [
            ("00:00:01.000", "00:00:02.000"),
            ("00:00:02.000", "00:00:04.000"),
            ("00:00:04.000", "00:00:05.000"),
        ]

    def test_translate_cues_keeps_timing(self):
        original = parse_vtt(SAMPLE)
        translated = asyncio.run(translate_cues(original, make_translator(TABLE), "en", "es"))

        assert len(translated) == len(original)
        for before, after in zip(original, translated):
            assert (before.start, before.end, before.original_index) == (
                after.start, after.end, after.original_index
            )

    def test_summarize_groups(self):
        groups = group_cues_into_sentences(parse_vtt(SAMPLE))
        assert summarize_groups(groups) == (3, 2)

    def test_quoted_cue_survives(self):
        content = "WEBVTT\n\n00:01.000 --> 00:02.000\n“We have to go.”\n"
        client = ScriptedClient({"“We have to go.”": "“Tenemos que irnos.”"})
        out = asyncio.run(translate_vtt(content, make_translate_fn(client, "m"), "en", "es"))

        assert out == "WEBVTT\n\n00:01.000 --> 00:02.000\n“Tenemos que irnos.”"

    def test_symbol_only_group_does_not_abort(self):
        content = "WEBVTT\n\n00:01.000 --> 00:02.000\n♪.\n\n00:02.000 --> 00:03.000\nHello there.\n"
        client = ScriptedClient({"♪.": "♪.", "Hello there.": "Hola."})
        out = asyncio.run(translate_vtt(content, make_translate_fn(client, "m"), "en", "es"))

        assert out == "WEBVTT\n\n00:01.000 --> 00:02.000\n♪.\n\n00:02.000 --> 00:03.000\nHola."
