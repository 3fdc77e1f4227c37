"""Unit tests for the agent catalog and lockfile table."""

import pytest

from pmdispatch.agents import (
    AGENTS,
    INSTALL_PAGE,
    LOCKS,
    Agent,
    ComputedTemplate,
    LiteralTemplate,
    UnknownAgentError,
    Verb,
    is_agent,
    selectable_agents,
    template_for,
)


class TestCatalogShape:
    def test_every_agent_defines_every_verb(self):
        for agent, table in AGENTS.items():
            assert set(table) == set(Verb), agent

    def test_every_agent_has_install_page(self):
        assert set(INSTALL_PAGE) == set(Agent)

    def test_literal_templates_have_at_most_one_placeholder(self):
        for table in AGENTS.values():
            for template in table.values():
                if isinstance(template, LiteralTemplate):
                    assert template.text.count("{0}") <= 1

    def test_only_npm_and_pnpm6_use_computed_run(self):
        computed = {
            agent for agent, table in AGENTS.items()
            if isinstance(table[Verb.RUN], ComputedTemplate)
        }
        assert computed == {Agent.NPM, Agent.PNPM_V6}


class TestTemplateFor:
    def test_npm_has_no_interactive_upgrade(self):
        assert template_for("npm", Verb.UPGRADE_INTERACTIVE) is None

    def test_accepts_enum_or_string(self):
        assert template_for(Agent.PNPM, Verb.ADD) == template_for("pnpm", Verb.ADD)

    def test_unknown_agent_raises(self):
        with pytest.raises(UnknownAgentError, match="deno"):
            template_for("deno", Verb.INSTALL)


class TestDerivedAgents:
    def test_yarn_berry_overrides(self):
        assert template_for("yarn@berry", Verb.FROZEN).text == "yarn install --immutable"
        assert template_for("yarn@berry", Verb.UPGRADE).text == "yarn up {0}"
        assert template_for("yarn@berry", Verb.UPGRADE_INTERACTIVE).text == "yarn up -i {0}"
        assert template_for("yarn@berry", Verb.EXECUTE).text == "yarn dlx {0}"

    def test_yarn_berry_globals_delegate_to_npm(self):
        assert template_for("yarn@berry", Verb.GLOBAL).text == "npm i -g {0}"
        assert template_for("yarn@berry", Verb.GLOBAL_UNINSTALL).text == "npm uninstall -g {0}"

    def test_yarn_berry_inherits_the_rest_from_yarn(self):
        for verb in (Verb.AGENT, Verb.RUN, Verb.INSTALL, Verb.ADD, Verb.UNINSTALL):
            assert template_for("yarn@berry", verb) == template_for("yarn", verb)

    def test_pnpm6_only_differs_in_run(self):
        for verb in Verb:
            if verb == Verb.RUN:
                continue
            assert template_for("pnpm@6", verb) == template_for("pnpm", verb)

    def test_bun_frozen_does_not_save_lockfile(self):
        assert template_for("bun", Verb.FROZEN).text == "bun install --no-save"


class TestHelpers:
    def test_executable_strips_qualifier(self):
        assert Agent.YARN_BERRY.executable == "yarn"
        assert Agent.PNPM_V6.executable == "pnpm"
        assert Agent.BUN.executable == "bun"

    def test_is_agent(self):
        assert is_agent("pnpm@6")
        assert not is_agent("pnpm@7")
        assert not is_agent("deno")

    def test_selectable_agents_excludes_qualified_variants(self):
        assert selectable_agents() == [Agent.NPM, Agent.YARN, Agent.PNPM, Agent.BUN]


class TestLocks:
    def test_priority_order(self):
        assert list(LOCKS) == [
            "bun.lockb",
            "pnpm-lock.yaml",
            "yarn.lock",
            "package-lock.json",
            "npm-shrinkwrap.json",
        ]

    def test_shrinkwrap_maps_to_npm(self):
        assert LOCKS["npm-shrinkwrap.json"] == Agent.NPM
