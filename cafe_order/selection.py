"""Per-category selection state transitions."""

from __future__ import annotations

from cafe_order.models import Cardinality, MultiSelection, Selection, SelectionState, SingleSelection


def empty_selection_state() -> dict[str, Selection]:
    return {}


def selected_ids(selection: Selection | None) -> frozenset[str]:
    """Return the option ids held by a selection, whatever its cardinality."""
    if selection is None:
        return frozenset()
    if isinstance(selection, SingleSelection):
        return frozenset({selection.option_id})
    return selection.option_ids


def is_selected(state: SelectionState, group_name: str, option_id: str) -> bool:
    return option_id in selected_ids(state.get(group_name))


def toggle_option(
    state: SelectionState,
    group_name: str,
    option_id: str,
    cardinality: Cardinality,
) -> dict[str, Selection]:
    """
    Apply one "toggle option" action and return the new state.

    Single groups hold at most one id: toggling the held id clears the group,
    any other id replaces it. Multi groups toggle set membership. The input
    state is never modified.
    """
    new_state = dict(state)
    current = new_state.get(group_name)

    if cardinality is Cardinality.SINGLE:
        if isinstance(current, SingleSelection) and current.option_id == option_id:
            del new_state[group_name]
        else:
            new_state[group_name] = SingleSelection(option_id)
        return new_state

    members = current.option_ids if isinstance(current, MultiSelection) else frozenset()
    if option_id in members:
        members = members - {option_id}
    else:
        members = members | {option_id}

    if members:
        new_state[group_name] = MultiSelection(members)
    else:
        new_state.pop(group_name, None)
    return new_state
