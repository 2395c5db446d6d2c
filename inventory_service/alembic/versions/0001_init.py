from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def _versioned():
    return [
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('version', sa.Integer, nullable=False, server_default='1'),
        sa.Column('created', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('modified', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('deleted', sa.DateTime, nullable=True),
    ]

def upgrade():
    op.create_table(
        'facility',
        sa.Column('facility_id', sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column('mservice_id', sa.BigInteger, nullable=False, index=True),
        sa.Column('facility_name', sa.String(255), nullable=False),
        sa.Column('json_data', sa.Text, nullable=False, server_default=''),
        *_versioned()
    )
    op.create_table(
        'subarea_type',
        sa.Column('mservice_id', sa.BigInteger, primary_key=True, index=True),
        sa.Column('subarea_type_id', sa.Integer, primary_key=True, autoincrement=False),
        sa.Column('subarea_type_name', sa.String(255), nullable=False),
        *_versioned()
    )
    op.create_table(
        'item_type',
        sa.Column('mservice_id', sa.BigInteger, primary_key=True, index=True),
        sa.Column('item_type_id', sa.Integer, primary_key=True, autoincrement=False),
        sa.Column('item_type_name', sa.String(255), nullable=False),
        *_versioned()
    )
    op.create_table(
        'subarea',
        sa.Column('subarea_id', sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column('mservice_id', sa.BigInteger, nullable=False, index=True),
        sa.Column('facility_id', sa.BigInteger, nullable=False, index=True),
        sa.Column('parent_subarea_id', sa.BigInteger, nullable=False, server_default='0'),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        sa.Column('subarea_type_id', sa.Integer, nullable=False, server_default='0'),
        sa.Column('subarea_name', sa.String(255), nullable=False),
        sa.Column('json_data', sa.Text, nullable=False, server_default=''),
        *_versioned()
    )
    op.create_table(
        'product',
        sa.Column('product_id', sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column('mservice_id', sa.BigInteger, nullable=False, index=True),
        sa.Column('sku', sa.String(100), nullable=False, server_default=''),
        sa.Column('product_name', sa.String(255), nullable=False),
        sa.Column('comment', sa.Text, nullable=False, server_default=''),
        sa.Column('json_data', sa.Text, nullable=False, server_default=''),
        *_versioned()
    )
    op.create_table(
        'inventory_item',
        sa.Column('inventory_item_id', sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column('mservice_id', sa.BigInteger, nullable=False, index=True),
        sa.Column('subarea_id', sa.BigInteger, nullable=False, index=True),
        sa.Column('item_type_id', sa.Integer, nullable=False, server_default='0'),
        sa.Column('quantity', sa.Integer, nullable=False, server_default='0'),
        sa.Column('serial_number', sa.String(100), nullable=False, server_default=''),
        sa.Column('product_id', sa.BigInteger, nullable=False, index=True),
        sa.Column('json_data', sa.Text, nullable=False, server_default=''),
        *_versioned()
    )
    op.create_table(
        'entity_schema',
        sa.Column('mservice_id', sa.BigInteger, primary_key=True, index=True),
        sa.Column('entity_name', sa.String(64), primary_key=True),
        sa.Column('json_schema', sa.Text, nullable=False),
        *_versioned()
    )

def downgrade():
    for table in ('entity_schema', 'inventory_item', 'product', 'subarea', 'item_type', 'subarea_type', 'facility'):
        op.drop_table(table)
