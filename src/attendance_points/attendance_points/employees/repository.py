from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Branch, Department, Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError


class DepartmentRepository(Protocol):
    def get_by_id(self, department_id: str) -> Optional[Department]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError


class BranchRepository(Protocol):
    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        raise NotImplementedError
