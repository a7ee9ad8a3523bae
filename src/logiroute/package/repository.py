"""Repository for the Package aggregate."""

from protean.exceptions import ObjectNotFoundError

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidArgument, NotFound
from logiroute.package.package import Package, PackageStatus


@logiroute.repository(part_of=Package)
class PackageRepository:
    def find_by_id(self, package_id: str) -> Package:
        """Fetch a package or raise ``NotFound``."""
        try:
            return self.get(package_id)
        except ObjectNotFoundError as exc:
            raise NotFound("Package", package_id) from exc

    def find_by_ids(self, package_ids: list[str]) -> list[Package]:
        """Resolve every id, in request order, or fail as a whole.

        Raises ``InvalidArgument`` listing the ids that did not resolve.
        """
        packages, missing = [], []
        for package_id in package_ids:
            try:
                packages.append(self.get(package_id))
            except ObjectNotFoundError:
                missing.append(str(package_id))

        if missing:
            raise InvalidArgument("package_ids", f"Some package IDs were not found: {', '.join(missing)}")
        return packages

    def find_all(self) -> list[Package]:
        return self._dao.query.order_by("created_at").all().items

    def find_by_status(self, status: PackageStatus | str) -> list[Package]:
        try:
            status = PackageStatus(status)
        except ValueError as exc:
            raise InvalidArgument("status", f"Unknown package status '{status}'") from exc
        return self._dao.query.filter(status=status.value).order_by("created_at").all().items

    def find_unassigned(self) -> list[Package]:
        return [pkg for pkg in self.find_all() if not pkg.is_assigned]

    def find_by_route(self, route_id: str) -> list[Package]:
        return self._dao.query.filter(route_id=route_id).all().items

    def discard(self, package: Package) -> None:
        self._dao.delete(package)
