"""Question rendering utilities for displaying the current quiz question."""

from __future__ import annotations

from quiz_quest.core.markdown_math_renderer import renderer
from quiz_quest.core.models import SessionSnapshot


def render_question_document(snapshot: SessionSnapshot, font_size: int = 14) -> str:
    """Render the current question, plus any revealed hint or explanation, as HTML.

    Args:
        snapshot: Session state to render; must have a current question
        font_size: Font size in points for the question text (default 14)

    Returns:
        HTML string ready for display in QWebEngineView
    """
    question = snapshot.current_question
    if question is None:
        return renderer.wrap_with_mathjax("<p><em>No question selected.</em></p>", font_size=font_size)

    parts = [renderer.render_fragment(question.prompt)]
    parts.append(f"<p><small>{question.points} pts</small></p>")
    if snapshot.reveal.hint_shown and question.hint_text:
        parts.append(f'<div class="hint">💡 <strong>Hint:</strong> {renderer.render_fragment(question.hint_text)}</div>')
    if snapshot.reveal.explanation_shown and question.explanation:
        parts.append(f'<div class="explanation">{renderer.render_fragment(question.explanation)}</div>')
    return renderer.wrap_with_mathjax("\n".join(parts), title=snapshot.quiz_title, font_size=font_size)
