"""Lockfile signatures.

The order here matters: when a directory holds several lockfiles the first
entry present wins, regardless of modification time.
"""

from pmdispatch.agents.catalog import Agent

LOCKS: dict[str, Agent] = {
    "bun.lockb": Agent.BUN,
    "pnpm-lock.yaml": Agent.PNPM,
    "yarn.lock": Agent.YARN,
    "package-lock.json": Agent.NPM,
    "npm-shrinkwrap.json": Agent.NPM,
}
