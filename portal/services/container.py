from portal.config import get_config
from portal.services.auth_service import AuthService
from portal.services.otp_service import OTPService
from portal.services.sms_service import SMSService
from portal.services.email_service import EmailService
from portal.services.professional_service import ProfessionalService
from portal.services.selection_service import SelectionService
from portal.services.question_service import QuestionService
from portal.services.district_service import DistrictService
from portal.services.bank_account_service import BankAccountService
from portal.services.shift_service import ShiftService

config = get_config()

# Initialize services
auth_service = AuthService(config)
otp_service = OTPService(config)
sms_service = SMSService(config)
email_service = EmailService(config)
professional_service = ProfessionalService(config)
selection_service = SelectionService(config)
question_service = QuestionService(config)
district_service = DistrictService(config)
bank_account_service = BankAccountService(config)
shift_service = ShiftService(config)
