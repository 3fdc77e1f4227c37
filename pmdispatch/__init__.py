"""Use the right package manager: detect npm / yarn / pnpm / bun and dispatch commands."""
