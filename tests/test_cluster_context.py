"""Unit tests for lib/cluster_context.py."""

from unittest.mock import Mock

import pytest

from lib.cluster_context import (
    ClusterContext,
    context_from_cluster_deployment,
    context_from_mapping,
    load_context_file,
    load_context_from_hub,
)
from lib.exceptions import ConfigurationError, ValidationError


def cluster_deployment(private_link=True, infra_id="mycluster-x7k2p", platform="aws"):
    cd = {
        "metadata": {"name": "mycluster", "namespace": "uhc-prod-123"},
        "spec": {
            "clusterName": "mycluster",
            "platform": {},
        },
    }
    if infra_id:
        cd["spec"]["clusterMetadata"] = {"infraID": infra_id, "clusterID": "abc"}
    if platform == "aws":
        cd["spec"]["platform"]["aws"] = {
            "region": "us-east-2",
            "privateLink": {"enabled": private_link},
        }
    else:
        cd["spec"]["platform"][platform] = {}
    return cd


@pytest.mark.unit
class TestClusterContext:
    def test_with_overrides_ignores_none(self):
        ctx = ClusterContext(infra_name="a-1", private_link=True, region="us-east-1")

        updated = ctx.with_overrides(infra_name=None, private_link=False, region=None)

        assert updated == ClusterContext(infra_name="a-1", private_link=False, region="us-east-1")
        assert ctx.private_link is True

    def test_validate_rejects_bad_region(self):
        with pytest.raises(ValidationError):
            ClusterContext(infra_name="a-1", private_link=True, region="mars-1").validate()

    def test_validate_rejects_bad_infra_name(self):
        with pytest.raises(ValidationError):
            ClusterContext(infra_name="Bad_Name", private_link=True).validate()


@pytest.mark.unit
class TestContextFromMapping:
    def test_full_mapping(self):
        ctx = context_from_mapping(
            {
                "infra_name": "mycluster-x7k2p",
                "private_link": True,
                "region": "us-east-1",
                "cluster_name": "mycluster",
                "aws_profile": "prod",
            }
        )
        assert ctx.infra_name == "mycluster-x7k2p"
        assert ctx.private_link is True
        assert ctx.aws_profile == "prod"

    @pytest.mark.parametrize("raw,expected", [("yes", True), ("False", False), ("1", True), (False, False)])
    def test_private_link_coercion(self, raw, expected):
        assert context_from_mapping({"infra_name": "a-1", "private_link": raw}).private_link is expected

    def test_private_link_defaults_false(self):
        assert context_from_mapping({"infra_name": "a-1"}).private_link is False

    def test_invalid_private_link(self):
        with pytest.raises(ConfigurationError, match="boolean"):
            context_from_mapping({"infra_name": "a-1", "private_link": "maybe"})

    def test_missing_infra_name(self):
        with pytest.raises(ConfigurationError, match="infra_name"):
            context_from_mapping({"private_link": True})

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="infraName"):
            context_from_mapping({"infra_name": "a-1", "infraName": "a-1"})


@pytest.mark.unit
class TestLoadContextFile:
    def test_loads_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cluster.yaml").write_text(
            "infra_name: mycluster-x7k2p\nprivate_link: true\nregion: us-west-2\n",
            encoding="utf-8",
        )

        ctx = load_context_file("cluster.yaml")

        assert ctx == ClusterContext(infra_name="mycluster-x7k2p", private_link=True, region="us-west-2")

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_context_file("missing.yaml")

    def test_invalid_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "bad.yaml").write_text("infra_name: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_context_file("bad.yaml")

    def test_non_mapping(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_context_file("list.yaml")


@pytest.mark.unit
class TestContextFromClusterDeployment:
    def test_private_link_cluster(self):
        ctx = context_from_cluster_deployment(cluster_deployment())

        assert ctx == ClusterContext(
            infra_name="mycluster-x7k2p",
            private_link=True,
            region="us-east-2",
            cluster_name="mycluster",
        )

    def test_private_link_absent_means_disabled(self):
        cd = cluster_deployment()
        del cd["spec"]["platform"]["aws"]["privateLink"]

        assert context_from_cluster_deployment(cd).private_link is False

    def test_not_installed(self):
        with pytest.raises(ConfigurationError, match="infraID"):
            context_from_cluster_deployment(cluster_deployment(infra_id=None))

    def test_not_aws(self):
        with pytest.raises(ConfigurationError, match="not an AWS cluster"):
            context_from_cluster_deployment(cluster_deployment(platform="gcp"))


@pytest.mark.unit
class TestLoadContextFromHub:
    def test_reads_cluster_deployment(self):
        kube = Mock()
        kube.get_cluster_deployment.return_value = cluster_deployment()

        ctx = load_context_from_hub(kube, "uhc-prod-123/mycluster")

        kube.get_cluster_deployment.assert_called_once_with("uhc-prod-123", "mycluster")
        assert ctx.infra_name == "mycluster-x7k2p"

    def test_not_found(self):
        kube = Mock()
        kube.get_cluster_deployment.return_value = None

        with pytest.raises(ConfigurationError, match="not found"):
            load_context_from_hub(kube, "uhc-prod-123/mycluster")

    def test_invalid_reference(self):
        kube = Mock()
        with pytest.raises(ValidationError):
            load_context_from_hub(kube, "just-a-name")
        kube.get_cluster_deployment.assert_not_called()
