from sqlalchemy import Column, Integer, Numeric, ForeignKey, CheckConstraint, String
from sqlalchemy.orm import relationship
from database import Base

class JournalLine(Base):
    __tablename__ = "journal_lines"

    id = Column(Integer, primary_key=True, index=True)
    journal_entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    debit = Column(Numeric(14, 2), CheckConstraint('debit >= 0'), nullable=False, default=0)
    credit = Column(Numeric(14, 2), CheckConstraint('credit >= 0'), nullable=False, default=0)
    description = Column(String, nullable=True)
    line_number = Column(Integer, nullable=False)

    # Relationships
    journal_entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("ChartOfAccounts")

    __table_args__ = (
        CheckConstraint(
            '(debit > 0 AND credit = 0) OR (debit = 0 AND credit > 0)',
            name='check_debit_or_credit_exclusive'
        ),
    )
