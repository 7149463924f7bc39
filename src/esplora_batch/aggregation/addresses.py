from typing import Iterable, Iterator, Tuple, overload

Address = str


class AddressSet:
    """
    Ordered collection of unique addresses, built once per request.
    """

    __slots__ = ("_addresses",)

    def __init__(self, addresses: Tuple[Address, ...] = ()):
        if len(set(addresses)) != len(addresses):
            raise ValueError("An address set cannot contain duplicate addresses.")
        self._addresses = addresses

    @overload
    def __getitem__(self, index: int) -> Address: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Address, ...]: ...

    def __getitem__(self, index):
        return self._addresses[index]

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[Address]:
        return iter(self._addresses)

    def __contains__(self, address: object) -> bool:
        return address in self._addresses

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AddressSet):
            return self._addresses == other._addresses
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._addresses)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._addresses)!r})"


def deduplicate(addresses: Iterable[Address]) -> AddressSet:
    """
    Removes repeated addresses, keeping each address at the position
    of its first occurrence.
    """

    seen = set()
    unique = []

    for address in addresses:
        if address not in seen:
            seen.add(address)
            unique.append(address)

    return AddressSet(tuple(unique))
