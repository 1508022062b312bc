"""Seed default project settings

Revision ID: 002
Revises: 001
Create Date: 2025-01-06 00:00:01.000000

"""
from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # The project starts on the day the schema is installed
    op.execute(
        """
        INSERT INTO project_settings (setting_key, setting_value, description)
        VALUES
            ('project_start_date', to_char(CURRENT_DATE, 'YYYY-MM-DD'),
             'First day shown in the attendance matrix'),
            ('annual_leave_days', '14', 'Leave days allowed per leave year'),
            ('annual_leave_reset_date', '07-16', 'Leave year start (MM-DD)')
        ON CONFLICT (setting_key) DO NOTHING
        """
    )


def downgrade() -> None:
    op.execute(
        """
        DELETE FROM project_settings
        WHERE setting_key IN ('project_start_date', 'annual_leave_days', 'annual_leave_reset_date')
        """
    )
