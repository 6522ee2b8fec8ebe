# models_bootstrap.py
from user import models as _user_models
from department import models as _department_models
from leaverequest import models as _leaverequest_models
from event import models as _event_models
