from clinicleads_api.db.models import AiLandingPage, Base, DoctorProfileRecord

__all__ = ["AiLandingPage", "Base", "DoctorProfileRecord"]
