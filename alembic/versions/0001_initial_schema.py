"""Initial schema: users, categories, vote options, properties, votes

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '0001'
down_revision: Union[str, Sequence, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


CATEGORIES = [
    ('Residential', 'Residential properties including houses, apartments, and condos'),
    ('Commercial', 'Commercial properties including offices, retail spaces, and warehouses'),
    ('Land', 'Undeveloped land plots'),
    ('Material', 'Construction materials and supplies'),
]

VOTE_OPTIONS = {
    'Residential': [
        ('Rent', 'Interested in renting this property'),
        ('Buy', 'Interested in buying this property'),
        ('Lease', 'Interested in leasing this property long-term'),
        ('Partner', 'Interested in partnering with the owner'),
    ],
    'Commercial': [
        ('Rent', 'Interested in renting this commercial space'),
        ('Buy', 'Interested in buying this commercial property'),
        ('Lease', 'Interested in leasing this commercial space long-term'),
        ('Invest', 'Interested in investing in this commercial property'),
        ('Partner', 'Interested in business partnership opportunity'),
    ],
    'Land': [
        ('Buy', 'Interested in buying this land'),
        ('Develop', 'Interested in developing this land'),
        ('Joint Venture', 'Interested in joint venture development'),
        ('Lease', 'Interested in leasing this land'),
    ],
    'Material': [
        ('Buy', 'Interested in buying these materials'),
        ('Supply Contract', 'Interested in ongoing supply contract'),
        ('Exchange', 'Interested in exchanging for other materials'),
        ('Wholesale', 'Interested in wholesale purchase'),
    ],
}


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Create tables and seed categories with their vote options."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('vote_options',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'category_id', name='uq_vote_options_name_category')
    )
    op.create_index('ix_vote_options_category_id', 'vote_options', ['category_id'])

    op.create_table('properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('current_worth', sa.Numeric(15, 2), nullable=True),
        sa.Column('year_of_construction', sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_properties_category_id', 'properties', ['category_id'])
    op.create_index('idx_properties_user_id', 'properties', ['user_id'])

    op.create_table('votes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('vote_option_id', sa.Integer(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['vote_option_id'], ['vote_options.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('property_id', 'user_id', name='uq_votes_property_user')
    )
    op.create_index('idx_votes_property_id', 'votes', ['property_id'])
    op.create_index('idx_votes_user_id', 'votes', ['user_id'])
    op.create_index('idx_votes_vote_option_id', 'votes', ['vote_option_id'])

    categories = sa.table('categories',
        sa.column('name', sa.String),
        sa.column('description', sa.Text),
    )
    op.bulk_insert(categories, [
        {'name': name, 'description': description} for name, description in CATEGORIES
    ])

    # Category ids are serial, so options resolve their category by name
    for category_name, options in VOTE_OPTIONS.items():
        for option_name, description in options:
            op.execute(
                sa.text(
                    "INSERT INTO vote_options (name, category_id, description) "
                    "SELECT :name, id, :description FROM categories WHERE name = :category"
                ).bindparams(name=option_name, description=description, category=category_name)
            )


def downgrade() -> None:
    """Drop all tables, children first."""
    op.drop_index('idx_votes_vote_option_id', table_name='votes')
    op.drop_index('idx_votes_user_id', table_name='votes')
    op.drop_index('idx_votes_property_id', table_name='votes')
    op.drop_table('votes')
    op.drop_index('idx_properties_user_id', table_name='properties')
    op.drop_index('idx_properties_category_id', table_name='properties')
    op.drop_table('properties')
    op.drop_index('ix_vote_options_category_id', table_name='vote_options')
    op.drop_table('vote_options')
    op.drop_table('categories')
    op.drop_table('users')
