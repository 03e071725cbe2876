import pytest

from infrabuilder.context import ModelBuilderContext
from infrabuilder.exceptions import CircularDependencyError, DuplicateTaskError, ReferenceNotFoundError
from infrabuilder.tasks import VPC, Link, SecurityGroup, SecurityGroupRule, Subnet


def vpc(cidr="10.0.0.0/16"):
    return VPC(name="cluster", cidr=cidr)


def group(name="web"):
    return SecurityGroup(name=name, vpc=VPC.link("cluster"))


class TestAddTask:

    def test_insertion_order_preserved(self):
        c = ModelBuilderContext()
        c.add_task(group("b"))
        c.add_task(vpc())
        c.add_task(group("a"))
        assert list(c.tasks) == ["SecurityGroup/b", "VPC/cluster", "SecurityGroup/a"]

    def test_equal_task_merges(self):
        c = ModelBuilderContext()
        first = c.add_task(vpc())
        assert c.add_task(vpc()) is first
        assert len(c) == 1

    def test_conflicting_task_raises(self):
        c = ModelBuilderContext()
        c.add_task(vpc())
        with pytest.raises(DuplicateTaskError, match="VPC/cluster"):
            c.add_task(vpc("10.1.0.0/16"))

    def test_same_name_different_kind_coexist(self):
        c = ModelBuilderContext()
        c.add_task(vpc())
        c.add_task(SecurityGroup(name="cluster", vpc=VPC.link("cluster")))
        assert len(c) == 2
        assert "VPC/cluster" in c and "SecurityGroup/cluster" in c

    def test_find_by_kind(self):
        c = ModelBuilderContext()
        c.add_task(vpc())
        c.add_task(group("a"))
        c.add_task(group("b"))
        assert [t.name for t in c.find(SecurityGroup.kind)] == ["a", "b"]


class TestResolve:

    def test_forward_links_resolve(self):
        """A task may link to a task that is added after it."""
        c = ModelBuilderContext()
        c.add_task(group())
        c.add_task(vpc())
        graph = c.resolve()
        assert graph.dependencies("SecurityGroup/web") == ["VPC/cluster"]
        assert graph.order() == ["VPC/cluster", "SecurityGroup/web"]

    def test_missing_target_raises(self):
        c = ModelBuilderContext()
        c.add_task(group())
        with pytest.raises(ReferenceNotFoundError, match="'SecurityGroup/web' links to 'VPC/cluster'"):
            c.resolve()

    def test_links_in_lists_and_optional_fields(self):
        c = ModelBuilderContext()
        c.add_task(vpc())
        c.add_task(group("target"))
        c.add_task(group("source"))
        c.add_task(SecurityGroupRule(
            name="r",
            security_group=SecurityGroup.link("target"),
            source_group=SecurityGroup.link("source"),
        ))
        graph = c.resolve()
        assert graph.dependencies("SecurityGroupRule/r") == ["SecurityGroup/target", "SecurityGroup/source"]

    def test_duplicate_links_counted_once(self):
        c = ModelBuilderContext()
        c.add_task(vpc())
        c.add_task(group())
        c.add_task(SecurityGroupRule(
            name="self",
            security_group=SecurityGroup.link("web"),
            source_group=SecurityGroup.link("web"),
        ))
        assert c.resolve().dependencies("SecurityGroupRule/self") == ["SecurityGroup/web"]

    def test_cycle_raises(self):
        c = ModelBuilderContext()
        c.add_task(VPC(name="cluster"))
        c.add_task(Subnet(name="a", vpc=VPC.link("cluster"), availability_zone="z"))
        c.add_task(SecurityGroup(name="cluster", vpc=Link(kind="SecurityGroup", name="loop")))
        c.add_task(SecurityGroup(name="loop", vpc=Link(kind="SecurityGroup", name="cluster")))
        with pytest.raises(CircularDependencyError, match="SecurityGroup/cluster, SecurityGroup/loop"):
            c.resolve()


class TestTaskGraph:

    def test_order_ties_follow_insertion(self):
        c = ModelBuilderContext()
        c.add_task(group("z"))
        c.add_task(group("a"))
        c.add_task(vpc())
        c.add_task(group("m"))
        assert c.resolve().order() == ["VPC/cluster", "SecurityGroup/z", "SecurityGroup/a", "SecurityGroup/m"]

    def test_dump(self):
        c = ModelBuilderContext()
        c.add_task(VPC(name="cluster"))
        c.add_task(group())
        assert c.resolve().dump() == [
            {"kind": "VPC", "name": "cluster"},
            {
                "kind": "SecurityGroup",
                "name": "web",
                "vpc": {"kind": "VPC", "name": "cluster"},
                "remove_extra_rules": [],
            },
        ]
