#!/usr/bin/env python3
"""
文本可读性与语法分析工具 - Streamlit 版本
使用方法: streamlit run analyze-tool.py
"""

import asyncio
import sys
import os
import streamlit as st

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from textinsight.core.errors import BaseApplicationError
from textinsight.services.analysis_service import analyze_once
from textinsight.services.match_classifier import classify_matches
from textinsight.services.readability import compute_text_stats
from textinsight.services.replacement import apply_replacement, rebase_matches, record_fix

LANGUAGES = {
    "en": "English",
    "fr": "French",
    "it": "Italian",
    "de": "German",
    "es": "Spanish",
}

# 初始化 session state
for key, default in (("content", ""), ("result", None), ("matches", []), ("fixed", {})):
    if key not in st.session_state:
        st.session_state[key] = default


def _apply(match_key: str, value: str) -> None:
    """Button callback: runs before the rerun, so the text area can still be updated."""
    match = next((m for m in st.session_state.matches if m.key == match_key), None)
    if match is None:
        return
    try:
        result = apply_replacement(st.session_state.content, match, value)
    except BaseApplicationError as e:
        st.session_state.apply_error = e.message
        return
    st.session_state.content = result.content
    st.session_state.matches = rebase_matches(st.session_state.matches, match, result.delta)
    st.session_state.fixed = record_fix(st.session_state.fixed, match, value)


def _render_group(groups, fixed, section: str) -> None:
    for sentence, matches in groups.items():
        st.markdown(f"> {sentence}")
        for index, match in enumerate(matches):
            st.write(f"**{match.short_message or match.rule_id or 'Issue'}**: {match.message}")
            applied = fixed.get(match.key)
            if applied is not None:
                st.success(f"Applied: {applied}")
                continue
            if not match.replacements:
                st.caption("No replacement suggested")
                continue
            columns = st.columns(min(len(match.replacements), 5))
            for col, value in zip(columns, match.replacements[:5]):
                with col:
                    st.button(
                        value or "(remove)",
                        key=f"{section}-{match.key}-{index}-{value}",
                        on_click=_apply,
                        args=(match.key, value),
                    )


def main():
    """主函数"""
    st.set_page_config(
        page_title="Text Insight",
        page_icon="📝",
        layout="wide"
    )

    st.title("📝 Text Insight")
    st.markdown("---")

    col_text, col_lang = st.columns([4, 1])
    with col_lang:
        language = st.selectbox(
            "Language",
            options=list(LANGUAGES),
            format_func=LANGUAGES.get,
        )
    with col_text:
        st.text_area(
            "Content",
            height=200,
            key="content",
            placeholder="Write your content here ..."
        )

    analyze_button = st.button("Send It", type="primary")

    if analyze_button:
        content = st.session_state.content
        if not content.strip():
            st.error("❌ Content must not be empty")
        else:
            with st.spinner("Please wait"):
                try:
                    result = asyncio.run(analyze_once(content, language))
                except BaseApplicationError as e:
                    st.error(f"❌ {e.message}")
                else:
                    st.session_state.result = result
                    st.session_state.matches = list(result.corrections or [])
                    st.session_state.fixed = {}
                    st.toast(result.message or "Analysis complete")

    if st.session_state.get("apply_error"):
        st.warning(st.session_state.pop("apply_error"))

    result = st.session_state.result
    if result is None:
        return

    st.markdown("---")
    st.subheader("Analysis Result")

    stats = compute_text_stats(st.session_state.content)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Word Count", stats.word_count)
    with col2:
        st.metric("Character Count", stats.character_count)
    with col3:
        st.metric("Readability Score", stats.readability.score, help=stats.readability.label)

    if result.language is not None:
        st.caption(f"Checked as {result.language.name or result.language.code}")
    for service, message in (result.errors or {}).items():
        st.warning(f"{service}: {message}")

    classified = classify_matches(st.session_state.matches, st.session_state.fixed)

    st.markdown("### Grammar Corrections")
    if classified.corrections:
        _render_group(classified.corrections, classified.fixed, "correction")
    else:
        st.info("No one-click corrections")

    st.markdown("### Suggestions")
    if classified.suggestions:
        _render_group(classified.suggestions, classified.fixed, "suggestion")
    else:
        st.info("No suggestions")

    if result.embedding:
        with st.expander(f"Embedding ({len(result.embedding)} dimensions)"):
            st.write(result.embedding[:16])


if __name__ == "__main__":
    main()
