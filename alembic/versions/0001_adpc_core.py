from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '0001_adpc_core'
down_revision = None
branch_labels = None
depends_on = None

JSONB = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(), nullable=False, unique=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'adpc_questions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('dimension', sa.String(), nullable=False, index=True),
        sa.Column('version', sa.String(), nullable=False, index=True),
        sa.UniqueConstraint('code', 'version', name='uq_adpc_question_code_version'),
    )

    op.create_table(
        'adpc_options',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('question_id', sa.Uuid(as_uuid=True), sa.ForeignKey('adpc_questions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('dimension', sa.String(), nullable=True),
        sa.UniqueConstraint('question_id', 'code', name='uq_adpc_option_question_code'),
    )

    op.create_table(
        'adpc_submissions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False, index=True),
        sa.Column('version', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'adpc_responses',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('submission_id', sa.Uuid(as_uuid=True), sa.ForeignKey('adpc_submissions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('question_id', sa.Uuid(as_uuid=True), sa.ForeignKey('adpc_questions.id'), nullable=False, index=True),
        sa.Column('option_id', sa.Uuid(as_uuid=True), sa.ForeignKey('adpc_options.id'), nullable=False),
        sa.UniqueConstraint('submission_id', 'question_id', name='uq_adpc_response_submission_question'),
    )

    op.create_table(
        'adpc_results',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('submission_id', sa.Uuid(as_uuid=True), sa.ForeignKey('adpc_submissions.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('scores', JSONB, nullable=False),
        sa.Column('primary_profile', sa.String(), nullable=False),
        sa.Column('explanations', JSONB, nullable=True),
        sa.Column('pdf_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('request_id', sa.String(), nullable=True, index=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('ip', sa.String(), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('status_code', sa.Integer(), nullable=True),
        sa.Column('payload', JSONB, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade():
    op.drop_table('audit_logs')
    op.drop_table('adpc_results')
    op.drop_table('adpc_responses')
    op.drop_table('adpc_submissions')
    op.drop_table('adpc_options')
    op.drop_table('adpc_questions')
    op.drop_table('users')
