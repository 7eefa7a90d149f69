"""Deal pipeline: kanban board, stage transitions, archive flows."""
