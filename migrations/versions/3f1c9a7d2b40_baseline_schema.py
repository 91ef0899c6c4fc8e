"""baseline schema

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.512307

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c9a7d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('user_type', sa.Enum('COMPANY', 'ADVISOR', 'ADMIN', name='usertype', create_constraint=True), nullable=False),
        sa.Column('company_relationships', sa.JSON(), nullable=False),
        sa.Column('invite_status', sa.Enum('PENDING', 'ACCEPTED', name='invitestatus', create_constraint=True), nullable=False),
        sa.Column('auth_user_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_user_type'), 'users', ['user_type'], unique=False)

    op.create_table('auth_identities',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('password_hash', sa.String(length=512), nullable=False),
        sa.Column('user_metadata', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_auth_identities_email'), 'auth_identities', ['email'], unique=True)

    op.create_table('companies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('industry', sa.String(length=128), nullable=True),
        sa.Column('stage', sa.String(length=64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('tagline', sa.String(length=255), nullable=True),
        sa.Column('logo_url', sa.String(length=1024), nullable=True),
        sa.Column('typical_nudge_types', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('advisors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('role', sa.String(length=255), nullable=False),
        sa.Column('executive_type', sa.String(length=64), nullable=True),
        sa.Column('years_experience', sa.Integer(), nullable=False),
        sa.Column('interests', sa.JSON(), nullable=False),
        sa.Column('special_domains', sa.JSON(), nullable=False),
        sa.Column('expertise_tags', sa.JSON(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('open_to_new_advisory_boards', sa.Boolean(), nullable=False),
        sa.Column('profile_photo_url', sa.String(length=1024), nullable=True),
        sa.Column('company_relationships', sa.JSON(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_advisors_email'), 'advisors', ['email'], unique=False)
    op.create_index(op.f('ix_advisors_user_id'), 'advisors', ['user_id'], unique=False)

    op.create_table('relationships',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('advisor_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('CONNECTED', 'NOT_CONNECTED', name='relationshipstatus', create_constraint=True), nullable=False),
        sa.Column('interaction_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['advisor_id'], ['advisors.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('company_id', 'advisor_id', name='uq_relationships_pair')
    )
    op.create_index(op.f('ix_relationships_advisor_id'), 'relationships', ['advisor_id'], unique=False)
    op.create_index(op.f('ix_relationships_company_id'), 'relationships', ['company_id'], unique=False)

    op.create_table('contacts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('advisor_id', sa.Integer(), nullable=False),
        sa.Column('company_relationship', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('cadence', sa.String(length=64), nullable=True),
        sa.Column('compensation', sa.String(length=255), nullable=True),
        sa.Column('support_type', sa.JSON(), nullable=False),
        sa.Column('status', sa.Enum('SENT', 'ACCEPTED', 'DECLINED', 'EXPIRED', 'WITHDRAWN', name='contactstatus', create_constraint=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['advisor_id'], ['advisors.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_contacts_advisor_id'), 'contacts', ['advisor_id'], unique=False)
    op.create_index(op.f('ix_contacts_company_id'), 'contacts', ['company_id'], unique=False)
    op.create_index(op.f('ix_contacts_status'), 'contacts', ['status'], unique=False)
    op.create_index('ix_contacts_pair_status', 'contacts', ['company_relationship', 'advisor_id', 'status'], unique=False)

    op.create_table('handshakes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('advisor_id', sa.Integer(), nullable=False),
        sa.Column('company_relationship', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('engagement_style', sa.String(length=32), nullable=False),
        sa.Column('channels', sa.JSON(), nullable=False),
        sa.Column('response_expectation', sa.String(length=16), nullable=False),
        sa.Column('capacity_hours_per_month', sa.Integer(), nullable=False),
        sa.Column('focus_areas', sa.JSON(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('review_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.Enum('PROPOSED', 'ACTIVE', 'DISMISSED', 'PAUSED', 'ENDED', name='handshakestatus', create_constraint=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['advisor_id'], ['advisors.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_handshakes_advisor_id'), 'handshakes', ['advisor_id'], unique=False)
    op.create_index(op.f('ix_handshakes_company_id'), 'handshakes', ['company_id'], unique=False)
    op.create_index(op.f('ix_handshakes_status'), 'handshakes', ['status'], unique=False)
    op.create_index('ix_handshakes_pair_status', 'handshakes', ['company_relationship', 'advisor_id', 'status'], unique=False)

    op.create_table('nudges',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('advisor_id', sa.Integer(), nullable=False),
        sa.Column('company_relationship', sa.String(length=255), nullable=False),
        sa.Column('details', sa.Text(), nullable=False),
        sa.Column('nudge_tag', sa.String(length=64), nullable=False),
        sa.Column('max_time_requested', sa.String(length=32), nullable=False),
        sa.Column('status', sa.Enum('SENT', 'ACCEPTED', 'DECLINED', 'COMPLETED', name='nudgestatus', create_constraint=True), nullable=False),
        sa.Column('advisor_completed', sa.Boolean(), nullable=False),
        sa.Column('company_confirmed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['advisor_id'], ['advisors.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_nudges_advisor_id'), 'nudges', ['advisor_id'], unique=False)
    op.create_index(op.f('ix_nudges_company_id'), 'nudges', ['company_id'], unique=False)
    op.create_index(op.f('ix_nudges_status'), 'nudges', ['status'], unique=False)

    op.create_table('advisor_applications',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('role', sa.String(length=255), nullable=False),
        sa.Column('executive_type', sa.String(length=64), nullable=False),
        sa.Column('years_experience', sa.Integer(), nullable=False),
        sa.Column('interests', sa.JSON(), nullable=False),
        sa.Column('special_domains', sa.JSON(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('linkedin_url', sa.String(length=1024), nullable=False),
        sa.Column('profile_visibility', sa.Boolean(), nullable=False),
        sa.Column('status', sa.Enum('PENDING', 'APPROVED', 'DENIED', name='applicationstatus', create_constraint=True), nullable=False),
        sa.Column('reviewed_by', sa.String(length=255), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_advisor_applications_email'), 'advisor_applications', ['email'], unique=False)
    op.create_index(op.f('ix_advisor_applications_status'), 'advisor_applications', ['status'], unique=False)


def downgrade():
    op.drop_table('advisor_applications')
    op.drop_table('nudges')
    op.drop_table('handshakes')
    op.drop_table('contacts')
    op.drop_table('relationships')
    op.drop_table('advisors')
    op.drop_table('companies')
    op.drop_table('auth_identities')
    op.drop_table('users')
    for enum_name in (
        'applicationstatus', 'nudgestatus', 'handshakestatus', 'contactstatus',
        'relationshipstatus', 'invitestatus', 'usertype',
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
