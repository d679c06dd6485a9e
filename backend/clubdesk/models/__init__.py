from .base import SoftDeleteMixin, AttendanceStatus, TransactionType
from .Student import Student
from .Instructor import Instructor
from .AttendanceRecord import AttendanceRecord
from .MonthlyFinalization import MonthlyFinalization
from .Setting import Setting
from .Transaction import Transaction
from .TuitionPayment import TuitionPayment
from .Event import Event
