"""Rendering for Form slots."""

from rich.text import Text

from ..form import Form, Slot, SlotKind
from ..styles import Styles, letter_spaced


def render_slot(slot: Slot, focused: bool, styles: Styles) -> Text:
    text = Text()
    if slot.kind is SlotKind.SUBMIT:
        label = f"[ {slot.label} ]"
        text.append(label, styles.selected if focused else styles.button)
        return text

    text.append(letter_spaced(slot.label), styles.focused if focused else styles.blurred)
    text.append("\n")

    if slot.kind is SlotKind.SELECTOR:
        selector = slot.widget
        for i, choice in enumerate(selector.choices):
            name = getattr(choice, "label", str(choice))
            if i == selector.index:
                text.append(f" {name} ", styles.selected if focused else styles.accent)
            else:
                text.append(f" {name} ", styles.blurred)
            text.append(" ")
        if focused:
            text.append("\n")
            text.append(letter_spaced("←/→ to change"), styles.help)
        return text

    text.append(slot.widget.render(styles.focused if focused else ""))
    return text


def render_form(form: Form, styles: Styles) -> Text:
    text = Text()
    for i, slot in enumerate(form.slots):
        text.append(render_slot(slot, i == form.focus_index, styles))
        text.append("\n\n")
    return text
