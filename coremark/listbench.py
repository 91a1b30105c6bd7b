"""Linked-list benchmark: find, reverse, sort and restore a singly linked list."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from coremark.common import Algorithm, crc16, crcu16, to_s16, to_u16
from coremark.matrix import MatrixParams, bench_matrix
from coremark.state import bench_state

# Size of one list item as the benchmark budgets it: 16 bytes of header plus the data cell.
_BYTES_PER_ITEM = 16 + 4


@dataclass
class ListData:
    """Payload of a list cell: packed data bits and the original index."""

    data16: int
    idx: int


@dataclass(eq=False)
class ListNode:
    """A cell of a singly linked list."""

    info: ListData
    next: ListNode | None = field(default=None, repr=False)

    def __iter__(self) -> Iterator[ListNode]:
        node: ListNode | None = self
        while node is not None:
            yield node
            node = node.next


@dataclass
class CoreResults:
    """Inputs, working data and CRC outputs of one benchmark context."""

    seed1: int = 0
    seed2: int = 0
    seed3: int = 0
    size: int = 0
    iterations: int = 0
    execs: Algorithm = Algorithm.ALL
    list_head: ListNode | None = None
    matrix: MatrixParams | None = None
    state_data: bytearray | None = None
    crc: int = 0
    crclist: int = 0
    crcmatrix: int = 0
    crcstate: int = 0
    err: int = 0


ListCmp = Callable[[ListData, ListData, "CoreResults | None"], int]


def calc_func(info: ListData, res: CoreResults) -> int:
    """Return the 7-bit value encoded in info, computing and caching it on first use."""
    data = to_s16(info.data16)
    if (data >> 7) & 1:
        return data & 0x007F
    flag = data & 0x7
    dtype = (data >> 3) & 0xF
    dtype |= dtype << 4
    if flag == 0:
        if res.state_data is None:
            raise ValueError("state data is required for this list item")
        dtype = max(dtype, 0x22)
        retval = to_s16(
            bench_state(res.state_data, res.seed1, res.seed2, dtype, res.crc)
        )
        if res.crcstate == 0:
            res.crcstate = to_u16(retval)
    elif flag == 1:
        if res.matrix is None:
            raise ValueError("matrix data is required for this list item")
        retval = to_s16(bench_matrix(res.matrix, dtype, res.crc))
        if res.crcmatrix == 0:
            res.crcmatrix = to_u16(retval)
    else:
        retval = data
    res.crc = crcu16(retval, res.crc)
    retval &= 0x007F
    info.data16 = to_s16((data & 0xFF00) | 0x0080 | retval)
    return retval


def cmp_complex(a: ListData, b: ListData, res: CoreResults) -> int:
    """Compare two cells by their computed values."""
    return calc_func(a, res) - calc_func(b, res)


def cmp_idx(a: ListData, b: ListData, res: CoreResults | None) -> int:
    """Compare two cells by index; without results, first restore their data from the backup byte."""
    if res is None:
        for cell in (a, b):
            cell.data16 = to_s16((cell.data16 & 0xFF00) | (0x00FF & (cell.data16 >> 8)))
    return a.idx - b.idx


def list_init(blksize: int, seed: int) -> ListNode:
    """Build the benchmark list for a memory budget of blksize bytes and return its head."""
    size = blksize // _BYTES_PER_ITEM - 2
    if size < 3:
        raise ValueError("block size too small for the list benchmark")
    seed = to_s16(seed)
    head = ListNode(ListData(data16=to_s16(0x8080), idx=0x0000))
    head.next = ListNode(ListData(data16=to_s16(0xFFFF), idx=0x7FFF))
    # Only size - 2 cells fit after the head, the first of them being the tail.
    for i in range(size - 3):
        datpat = (seed ^ i) & 0xF
        dat = (datpat << 3) | (i & 0x7)
        head.next = ListNode(ListData(data16=to_s16((dat << 8) | dat), idx=0), head.next)

    i = 1
    node = head.next
    while node.next is not None:
        if i < size // 5:
            node.info.idx = i
            i += 1
        else:
            pat = (i ^ seed) & 0xFFFF
            i += 1
            node.info.idx = 0x3FFF & (((i & 0x07) << 8) | pat)
        node = node.next
    result = list_mergesort(head, cmp_idx, None)
    assert result is not None
    return result


def list_find(node: ListNode | None, info: ListData) -> ListNode | None:
    """Find the first cell matching info.idx, or, if that is negative, the low data byte."""
    if info.idx >= 0:
        while node is not None and node.info.idx != info.idx:
            node = node.next
    else:
        while node is not None and (node.info.data16 & 0xFF) != info.data16:
            node = node.next
    return node


def list_reverse(node: ListNode | None) -> ListNode | None:
    """Reverse the list in place and return the new head."""
    reversed_head: ListNode | None = None
    while node is not None:
        following = node.next
        node.next = reversed_head
        reversed_head = node
        node = following
    return reversed_head


def list_remove(item: ListNode) -> ListNode:
    """Unlink the cell after item, moving its data into item; return the detached cell."""
    removed = item.next
    if removed is None:
        raise ValueError("cannot remove past the end of the list")
    item.info, removed.info = removed.info, item.info
    item.next = removed.next
    removed.next = None
    return removed


def list_undo_remove(item_removed: ListNode, item_modified: ListNode) -> ListNode:
    """Reverse a list_remove: swap the data back and relink the removed cell."""
    item_removed.info, item_modified.info = item_modified.info, item_removed.info
    item_removed.next = item_modified.next
    item_modified.next = item_removed
    return item_removed


def list_mergesort(head: ListNode | None, cmp: ListCmp, res: CoreResults | None) -> ListNode | None:
    """Sort the list in place with an iterative, stable merge sort; return the new head."""
    if head is None:
        return None
    insize = 1
    while True:
        p: ListNode | None = head
        head = None
        tail: ListNode | None = None
        nmerges = 0
        while p is not None:
            nmerges += 1
            q: ListNode | None = p
            psize = 0
            for _ in range(insize):
                psize += 1
                q = q.next
                if q is None:
                    break
            qsize = insize
            while psize > 0 or (qsize > 0 and q is not None):
                if psize == 0:
                    element, q = q, q.next
                    qsize -= 1
                elif qsize == 0 or q is None:
                    element, p = p, p.next
                    psize -= 1
                elif cmp(p.info, q.info, res) <= 0:
                    element, p = p, p.next
                    psize -= 1
                else:
                    element, q = q, q.next
                    qsize -= 1
                if tail is not None:
                    tail.next = element
                else:
                    head = element
                tail = element
            p = q
        assert tail is not None
        tail.next = None
        if nmerges <= 1:
            return head
        insize *= 2


def bench_list(res: CoreResults, finder_idx: int) -> int:
    """Run the list benchmark once; the list is back in its original state afterwards."""
    if res.list_head is None:
        raise ValueError("the list has not been initialised")
    retval = 0
    found = 0
    missed = 0
    head: ListNode = res.list_head
    info = ListData(data16=0, idx=to_s16(finder_idx))

    for i in range(to_s16(res.seed3)):
        info.data16 = i & 0xFF
        this_find = list_find(head, info)
        head = list_reverse(head)
        if this_find is None:
            missed += 1
            retval += (head.next.info.data16 >> 8) & 1
        else:
            found += 1
            if this_find.info.data16 & 0x1:
                retval += (this_find.info.data16 >> 9) & 1
            if this_find.next is not None:
                finder = this_find.next
                this_find.next = finder.next
                finder.next = head.next
                head.next = finder
        if info.idx >= 0:
            info.idx = to_s16(info.idx + 1)
    retval = to_u16(retval + found * 4 - missed)

    if finder_idx > 0:
        head = list_mergesort(head, cmp_complex, res)
    remover = list_remove(head.next)
    start = list_find(head, info) or head.next
    for _ in start if start is not None else ():
        retval = crc16(head.info.data16, retval)
    list_undo_remove(remover, head.next)

    head = list_mergesort(head, cmp_idx, None)
    for _ in head.next if head.next is not None else ():
        retval = crc16(head.info.data16, retval)
    return retval