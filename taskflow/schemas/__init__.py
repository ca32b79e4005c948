from .user import UserRegister, UserLogin, UserOut, UserBasic, RoleOut, RoleAssign, Timestamp
from .tokens import Token, MessageOut
from .task import TaskCreate, TaskUpdate, TaskOut, TaskEnvelope, TaskPage, TaskFilters
from .contact import ContactCreate
