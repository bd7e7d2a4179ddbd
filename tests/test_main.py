"""Tests for the kubectl-count entry point."""

import json
from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from kube_count.__main__ import build_config, main, parse_args
from kube_count.config import AuthMode
from kube_count.domains.catalog.models import ResourceTypeIdentity
from kube_count.domains.counting.models import Record, SortOrder
from kube_count.utils.errors import EmptyResultError, SyncFailure


class TestParseArgs:
    """Test command line parsing."""

    def test_defaults(self) -> None:
        """Test flag defaults."""
        args = parse_args(["pods"])

        assert args.kinds == "pods"
        assert not args.all_namespaces
        assert args.order == "asc"
        assert args.output_format == "table"
        assert args.namespace is None
        assert args.timeout is None

    def test_short_flags(self) -> None:
        """Test kubectl style short flags, including attached values."""
        args = parse_args(["-A", "-Od", "-oy", "-n", "kube-system", "rs,ep"])

        assert args.all_namespaces
        assert args.order == "d"
        assert args.output_format == "y"
        assert args.namespace == "kube-system"
        assert args.kinds == "rs,ep"

    def test_flag_values_are_case_insensitive(self) -> None:
        """Test order and output values are lowercased."""
        args = parse_args(["-O", "DESC", "-o", "JSON", "pods"])

        assert args.order == "desc"
        assert args.output_format == "json"

    def test_invalid_output_format(self) -> None:
        """Test unknown output formats are rejected."""
        with pytest.raises(SystemExit):
            parse_args(["-o", "xml", "pods"])

    def test_kinds_required(self) -> None:
        """Test the resource type list is required."""
        with pytest.raises(SystemExit):
            parse_args([])


class TestBuildConfig:
    """Test building config from arguments."""

    def test_flags_override(self) -> None:
        """Test flags are copied into the config."""
        args = parse_args([
            "--auth-mode", "kubeconfig",
            "--kubeconfig", "/tmp/kubeconfig",
            "--context", "dev",
            "--timeout", "30",
            "--log-level", "DEBUG",
            "-n", "ns1",
            "pods",
        ])

        config = build_config(args)

        assert config.auth_mode == AuthMode.KUBECONFIG
        assert str(config.kubeconfig_path) == "/tmp/kubeconfig"
        assert config.kubeconfig_context == "dev"
        assert config.sync_timeout_seconds == 30.0
        assert config.log_level.value == "DEBUG"
        assert config.namespace == "ns1"

    def test_zero_timeout_waits_forever(self) -> None:
        """Test --timeout 0 disables the sync timeout."""
        config = build_config(parse_args(["--timeout", "0", "pods"]))

        assert config.sync_timeout_seconds is None


class TestMain:
    """Test main() with the cluster collaborators patched out."""

    @pytest.fixture
    def patched(self) -> Iterator[dict[str, MagicMock]]:
        with (
            patch("kube_count.__main__.K8sClient") as k8s,
            patch("kube_count.__main__.DiscoveryCatalogClient") as catalog,
            patch("kube_count.__main__.KubernetesStreamSource") as source,
            patch("kube_count.__main__.CounterController") as controller,
            patch("kube_count.__main__.setup_logging"),
        ):
            yield {
                "k8s": k8s,
                "catalog": catalog,
                "source": source,
                "controller": controller,
            }

    @pytest.fixture
    def records(self, pod: ResourceTypeIdentity) -> list[Record]:
        return [
            Record(namespace="ns2", identity=pod, count=1),
            Record(namespace="ns1", identity=pod, count=2),
        ]

    def test_success_table(
        self,
        patched: dict[str, MagicMock],
        records: list[Record],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a successful run prints a table and exits 0."""
        patched["controller"].return_value.run.return_value = records

        exit_code = main(["pods"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "| Namespace |" in out
        assert "| ns1       |" in out
        patched["k8s"].return_value.connect.assert_called_once()
        patched["k8s"].return_value.disconnect.assert_called_once()

    def test_run_arguments(
        self,
        patched: dict[str, MagicMock],
        records: list[Record],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test flags reach the controller."""
        patched["controller"].return_value.run.return_value = records

        main(["-A", "-O", "desc", "-n", "team-a", "pods,deploy"])

        patched["controller"].return_value.run.assert_called_once_with(
            "pods,deploy",
            namespace="team-a",
            sort_order=SortOrder.DESC,
            collapse_namespaces=True,
        )

    def test_success_json(
        self,
        patched: dict[str, MagicMock],
        records: list[Record],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test JSON output."""
        patched["controller"].return_value.run.return_value = records

        exit_code = main(["-oj", "pods"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)[0]["namespace"] == "ns2"

    def test_empty_result(
        self,
        patched: dict[str, MagicMock],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test an empty result is reported on stderr with exit code 1."""
        patched["controller"].return_value.run.side_effect = EmptyResultError()

        exit_code = main(["pods"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert captured.out == ""
        assert "Error: no resources found" in captured.err
        patched["k8s"].return_value.disconnect.assert_called_once()

    def test_sync_failure(
        self,
        patched: dict[str, MagicMock],
        pod: ResourceTypeIdentity,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a sync failure names the resource type."""
        patched["controller"].return_value.run.side_effect = SyncFailure(pod, "timed out after 1s")

        exit_code = main(["pods"])

        assert exit_code == 1
        assert "failed to sync Pod (v1) cache" in capsys.readouterr().err

    def test_invalid_configuration(
        self,
        patched: dict[str, MagicMock],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test invalid settings exit before connecting."""
        exit_code = main(["--timeout", "-5", "pods"])

        assert exit_code == 1
        assert "invalid configuration" in capsys.readouterr().err
        patched["k8s"].assert_not_called()

    def test_missing_kubeconfig(
        self,
        patched: dict[str, MagicMock],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a missing kubeconfig file is reported before connecting."""
        exit_code = main([
            "--auth-mode", "kubeconfig",
            "--kubeconfig", "/nonexistent/kubeconfig",
            "pods",
        ])

        assert exit_code == 1
        assert "Kubeconfig file not found" in capsys.readouterr().err
        patched["k8s"].assert_not_called()
