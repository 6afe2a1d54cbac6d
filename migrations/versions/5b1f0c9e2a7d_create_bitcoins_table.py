"""create bitcoins table

Revision ID: 5b1f0c9e2a7d
Revises:
Create Date: 2025-10-12 09:41:03.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1f0c9e2a7d'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def upgrade() -> None:
    op.create_table(
        'bitcoins',
        sa.Column('symbol', sa.String(length=10), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.PrimaryKeyConstraint('symbol')
    )
    op.create_index('idx_bitcoin_price', 'bitcoins', [sa.text('price DESC')], unique=False)

    conn = op.get_bind()
    conn.execute(sa.text("""
        INSERT INTO bitcoins (symbol, price) VALUES
            ('BTC', 65000),
            ('ETH', 3500),
            ('BNB', 450)
        ON CONFLICT (symbol) DO NOTHING
    """))

def downgrade() -> None:
    op.drop_index('idx_bitcoin_price', table_name='bitcoins')
    op.drop_table('bitcoins')
