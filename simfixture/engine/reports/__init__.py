from .reports_generator import ReportsGenerator as ReportsGenerator
