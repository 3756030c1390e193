"""initial_reporting_tables

Revision ID: a41c7e2b9d10
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a41c7e2b9d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "report_templates",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("report_type", sa.String(50), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("data_source_config", sa.JSON(), nullable=False),
        sa.Column("report_structure", sa.JSON(), nullable=False),
        sa.Column("output_formats", sa.JSON(), nullable=False),
        sa.Column("access_level", sa.String(30), server_default="organization"),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("usage_count", sa.Integer(), server_default="0"),
        sa.Column("last_used_at", sa.DateTime(), nullable=True),
        sa.Column("created_by", sa.String(64), server_default=""),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_report_templates")),
    )
    op.create_index(op.f("ix_report_templates_tenant_id"), "report_templates", ["tenant_id"])

    op.create_table(
        "generated_reports",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column(
            "template_id",
            sa.Uuid(),
            sa.ForeignKey("report_templates.id", name=op.f("fk_generated_reports_template_id_report_templates")),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("report_type", sa.String(50), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("parameters", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(20), server_default="pending"),
        sa.Column("scheduled_for", sa.DateTime(), nullable=True),
        sa.Column("started_at", sa.DateTime(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("generation_time", sa.Integer(), nullable=True),
        sa.Column("report_data", sa.JSON(), nullable=True),
        sa.Column("total_records", sa.Integer(), nullable=True),
        sa.Column("output_files", sa.JSON(), nullable=False),
        sa.Column("data_hash", sa.String(64), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("error_details", sa.JSON(), nullable=True),
        sa.Column("generated_by", sa.String(64), server_default=""),
        sa.Column("requested_by", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_generated_reports")),
    )
    op.create_index(op.f("ix_generated_reports_tenant_id"), "generated_reports", ["tenant_id"])
    op.create_index(op.f("ix_generated_reports_status"), "generated_reports", ["status"])

    op.create_table(
        "analytics_dashboards",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("layout", sa.JSON(), nullable=True),
        sa.Column("widgets", sa.JSON(), nullable=False),
        sa.Column("refresh_interval", sa.Integer(), server_default="300"),
        sa.Column("access_level", sa.String(30), server_default="organization"),
        sa.Column("view_count", sa.Integer(), server_default="0"),
        sa.Column("average_load_time", sa.Float(), nullable=True),
        sa.Column("last_viewed_at", sa.DateTime(), nullable=True),
        sa.Column("created_by", sa.String(64), server_default=""),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_analytics_dashboards")),
    )
    op.create_index(op.f("ix_analytics_dashboards_tenant_id"), "analytics_dashboards", ["tenant_id"])

    op.create_table(
        "analytics_metrics",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column("metric_name", sa.String(100), nullable=False),
        sa.Column("metric_type", sa.String(50), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("dimension", sa.String(100), nullable=True),
        sa.Column("period_type", sa.String(30), nullable=False),
        sa.Column("period_start", sa.DateTime(), nullable=False),
        sa.Column("period_end", sa.DateTime(), nullable=False),
        sa.Column("value", sa.String(64), nullable=False),
        sa.Column("count", sa.Integer(), server_default="0"),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("computation_time", sa.Integer(), server_default="0"),
        sa.Column("source_data_timestamp", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_analytics_metrics")),
    )
    op.create_index(op.f("ix_analytics_metrics_tenant_id"), "analytics_metrics", ["tenant_id"])
    op.create_index(op.f("ix_analytics_metrics_metric_name"), "analytics_metrics", ["metric_name"])
    op.create_index(op.f("ix_analytics_metrics_period_start"), "analytics_metrics", ["period_start"])

    op.create_table(
        "report_schedules",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "template_id",
            sa.Uuid(),
            sa.ForeignKey("report_templates.id", name=op.f("fk_report_schedules_template_id_report_templates")),
            nullable=False,
        ),
        sa.Column("frequency", sa.String(20), nullable=False),
        sa.Column("schedule_config", sa.JSON(), nullable=False),
        sa.Column("default_parameters", sa.JSON(), nullable=False),
        sa.Column("distribution_config", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("last_run_at", sa.DateTime(), nullable=True),
        sa.Column("next_run_at", sa.DateTime(), nullable=True),
        sa.Column("successful_runs", sa.Integer(), server_default="0"),
        sa.Column("failed_runs", sa.Integer(), server_default="0"),
        sa.Column("last_error", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(64), server_default=""),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_report_schedules")),
    )
    op.create_index(op.f("ix_report_schedules_tenant_id"), "report_schedules", ["tenant_id"])
    op.create_index(op.f("ix_report_schedules_next_run_at"), "report_schedules", ["next_run_at"])


def downgrade() -> None:
    op.drop_table("report_schedules")
    op.drop_table("analytics_metrics")
    op.drop_table("analytics_dashboards")
    op.drop_table("generated_reports")
    op.drop_table("report_templates")
