"""Tests for ngapigen.render."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngapigen.exceptions import RenderError
from ngapigen.generator import build_plan
from ngapigen.models import ArtifactKind, GeneratorOptions, ParsedSpec
from ngapigen.render import atomic_write, build_context, render_plan


class TestRenderPlan:
    """Rendering a full plan into an output directory."""

    def test_orders(self, orders_spec: ParsedSpec, template_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        written = render_plan(build_plan(orders_spec), template_dir, out)

        assert [p.relative_to(out).as_posix() for p in written] == [
            "models/order.ts",
            "models/order-request.ts",
            "api/orders-api.ts",
            "api/orders-resources.ts",
        ]
        model = (out / "models" / "order.ts").read_text(encoding="utf-8")
        assert "export interface Order {" in model
        assert "readonly id: integer;" in model
        assert "readonly note?: string;" in model

        request = (out / "models" / "order-request.ts").read_text(encoding="utf-8")
        assert "readonly" not in request

        service = (out / "api" / "orders-api.ts").read_text(encoding="utf-8")
        assert "export class OrdersApi {" in service
        assert "inject(HttpClient)" in service
        assert "createOrder() {" in service
        assert "this.http.post(`/orders`)" in service

        resource = (out / "api" / "orders-resources.ts").read_text(encoding="utf-8")
        assert "export function listOrdersResource()" in resource

    def test_skipped_artifacts_not_written(
        self, courses_spec: ParsedSpec, template_dir: Path, tmp_path: Path
    ) -> None:
        plan = build_plan(courses_spec)
        written = render_plan(plan, template_dir, tmp_path / "out")
        assert len(written) == len(plan.emitted) == 9
        for skipped in plan.skip_set:
            assert not (tmp_path / "out" / skipped).exists()

    def test_value_dialect_in_resource(
        self, courses_spec: ParsedSpec, template_dir: Path, tmp_path: Path
    ) -> None:
        render_plan(build_plan(courses_spec), template_dir, tmp_path)
        resource = (tmp_path / "api" / "courses-resources.ts").read_text(encoding="utf-8")
        assert "`/courses/${courseIdValue}`" in resource

    def test_options_reach_templates(
        self, orders_spec: ParsedSpec, template_dir: Path, tmp_path: Path
    ) -> None:
        plan = build_plan(orders_spec, options=GeneratorOptions(use_injected_dependency=False))
        render_plan(plan, template_dir, tmp_path)
        service = (tmp_path / "api" / "orders-api.ts").read_text(encoding="utf-8")
        assert "inject(HttpClient)" not in service

    def test_missing_template_dir(self, orders_spec: ParsedSpec, tmp_path: Path) -> None:
        with pytest.raises(RenderError, match="Template directory not found"):
            render_plan(build_plan(orders_spec), tmp_path / "nope", tmp_path / "out")

    def test_missing_template(
        self, orders_spec: ParsedSpec, template_dir: Path, tmp_path: Path
    ) -> None:
        (template_dir / "api-resource.ts.j2").unlink()
        with pytest.raises(RenderError, match="api-resource.ts.j2") as exc_info:
            render_plan(build_plan(orders_spec), template_dir, tmp_path / "out")
        assert exc_info.value.exit_code == 9

    def test_undefined_variable(
        self, orders_spec: ParsedSpec, template_dir: Path, tmp_path: Path
    ) -> None:
        (template_dir / "model.ts.j2").write_text("{{ model.nope }}", encoding="utf-8")
        with pytest.raises(RenderError, match="model.ts.j2"):
            render_plan(build_plan(orders_spec), template_dir, tmp_path / "out")


class TestBuildContext:
    """Template variables per artifact kind."""

    def test_api_context(self, orders_spec: ParsedSpec) -> None:
        plan = build_plan(orders_spec)
        service = next(a for a in plan.artifacts if a.kind is ArtifactKind.SERVICE)
        context = build_context(plan, service)
        assert context["bundle"].tag == "Orders"
        assert context["hasGetOperations"] is True
        assert context["hasMutationOperations"] is True
        assert [op.nickname for op in context["getOperations"]] == ["listOrders"]
        assert [op.nickname for op in context["mutationOperations"]] == ["createOrder"]

    def test_model_context(self, orders_spec: ParsedSpec) -> None:
        plan = build_plan(orders_spec)
        context = build_context(plan, plan.artifacts[0])
        assert context["model"].name == "Order"
        assert context["options"] is plan.options


class TestAtomicWrite:
    """Temp-file-then-rename writes."""

    def test_creates_parents_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "file.ts"
        atomic_write(target, "export {};\n")
        assert target.read_text(encoding="utf-8") == "export {};\n"
        assert [p.name for p in target.parent.iterdir()] == ["file.ts"]

    def test_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "file.ts"
        target.write_text("old", encoding="utf-8")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
