import logging
import binpacket
import pytest

from binpacket.protocol import assembly
from binpacket.protocol import wire
from binpacket.protocol.assembly import Assembler, PendingPacket, State
from binpacket.protocol.fields import PacketType


def feed(assembler, frames):
    """ Feed every frame to the assembler, returning whatever the last
        one produced; every earlier frame must produce nothing.
    """

    frames = list(frames)

    for frame in frames[:-1]:
        assert assembler.add(frame) is None

    return assembler.add(frames[-1])


def test_encode_for_send():

    value = ['upload', {'name': 'a.bin', 'content': b'\x00\x01'}, b'\x02']
    packet = assembly.encode_for_send(value, namespace='/files', id=4)

    assert packet.type == PacketType.BINARY_EVENT
    assert packet.namespace == '/files'
    assert packet.id == 4
    assert packet.attachments == [b'\x00\x01', b'\x02']

    frames = list(packet)

    assert len(frames) == 3
    assert isinstance(frames[0], str)
    assert frames[0].startswith('52-/files,4[')
    assert frames[1:] == [b'\x00\x01', b'\x02']


def test_encode_for_send_plain():

    packet = assembly.encode_for_send(['hello', 'world'])

    assert packet.type == PacketType.EVENT
    assert list(packet) == ['2["hello","world"]']


def test_encode_for_send_ack():

    packet = assembly.encode_for_send([b'reply'], type=PacketType.ACK, id=9)
    assert packet.type == PacketType.BINARY_ACK


def test_encode_for_send_rejects_binary():

    with pytest.raises(ValueError):
        assembly.encode_for_send({'token': b'secret'}, type=PacketType.CONNECT)


def test_round_trip():

    value = {'foo': [b'b1', {'bar': b'b2'}], 'n': [1, 2.5, None, True]}
    sent = binpacket.encode_for_send(value)

    assembler = Assembler()
    received = feed(assembler, sent)

    assert received is not None
    assert received.type == PacketType.BINARY_EVENT
    assert received.data == value
    assert received.attachments == [b'b1', b'b2']
    assert assembler.state is State.AWAITING_SKELETON


def test_no_attachments():

    assembler = Assembler()
    received = assembler.add('2["just text"]')

    assert received.data == ['just text']
    assert assembler.pending is None


def test_binary_type_without_attachments():

    assembler = Assembler()
    received = assembler.add('50-[]')

    assert received.type == PacketType.BINARY_EVENT
    assert received.data == []


def test_consecutive_packets():

    assembler = Assembler()

    for n in range(5):
        value = [n, bytes([n]) * 3, {'again': bytes([n])}]
        received = feed(assembler, binpacket.encode_for_send(value))
        assert received.data == value


def test_bytes_like_frames():

    assembler = Assembler()
    frames = ['52-[{"_placeholder":true,"num":0},{"_placeholder":true,"num":1}]', bytearray(b'one'), memoryview(b'two')]
    received = feed(assembler, frames)

    assert received.data == [b'one', b'two']


def test_partial_arrival(monkeypatch):

    calls = list()

    def spy(skeleton, attachments, unused=None):
        calls.append(attachments)

    monkeypatch.setattr(assembly, 'on_packet_complete', spy)

    assembler = Assembler()
    assert assembler.add('52-[{"_placeholder":true,"num":0},{"_placeholder":true,"num":1}]') is None
    assert assembler.add(b'first') is None

    assert calls == []
    assert assembler.state is State.COLLECTING
    assert assembler.pending.expected == 2
    assert assembler.pending.collected == [b'first']


def test_pending_extra_frame():

    pending = PendingPacket()
    assert pending.state is State.AWAITING_SKELETON

    pending.start(wire.decode('52-[{"_placeholder":true,"num":0},{"_placeholder":true,"num":1}]'))
    assert pending.state is State.COLLECTING

    assert pending.add(b'one') is False
    assert pending.add(b'two') is True
    assert pending.state is State.COMPLETE

    with pytest.raises(binpacket.FrameOrderViolation):
        pending.add(b'three')

    assert pending.state is State.ERRORED


def test_pending_binary_first():

    pending = PendingPacket()

    with pytest.raises(binpacket.FrameOrderViolation):
        pending.add(b'orphan')

    assert pending.state is State.ERRORED


def test_pending_second_skeleton():

    pending = PendingPacket()
    pending.start(wire.decode('51-[{"_placeholder":true,"num":0}]'))

    with pytest.raises(binpacket.FrameOrderViolation):
        pending.start(wire.decode('2[]'))

    assert pending.state is State.ERRORED


def test_orphan_binary_frame():

    assembler = Assembler()

    with pytest.raises(binpacket.FrameOrderViolation):
        assembler.add(b'orphan')

    # Only that frame is lost; the stream carries on.

    received = feed(assembler, binpacket.encode_for_send([b'fine']))
    assert received.data == [b'fine']


def test_extra_binary_frame():

    assembler = Assembler()
    feed(assembler, binpacket.encode_for_send([b'one', b'two']))

    with pytest.raises(binpacket.FrameOrderViolation):
        assembler.add(b'three')

    assert assembler.state is State.AWAITING_SKELETON


def test_text_while_collecting(caplog):

    assembler = Assembler()
    assert assembler.add('52-[{"_placeholder":true,"num":0},{"_placeholder":true,"num":1}]') is None
    assert assembler.add(b'one') is None

    sent = list(binpacket.encode_for_send([b'good']))

    with caplog.at_level(logging.WARNING, logger='binpacket.protocol.assembly'):
        with pytest.raises(binpacket.FrameOrderViolation) as caught:
            assembler.add(sent[0])

    assert caught.value.packet is not None
    assert caught.value.packet.expected == 2
    assert caught.value.completed is None
    assert 'cancelled' in caplog.text

    # The interrupting skeleton starts the next packet, which completes.

    assert assembler.state is State.COLLECTING
    received = assembler.add(sent[1])

    assert received.data == [b'good']
    assert assembler.pending is None


def test_text_while_collecting_no_attachments():

    assembler = Assembler()
    assert assembler.add('51-[{"_placeholder":true,"num":0}]') is None

    with pytest.raises(binpacket.FrameOrderViolation) as caught:
        assembler.add('2["next"]')

    assert caught.value.packet.expected == 1
    assert caught.value.completed.data == ['next']
    assert assembler.pending is None

    assert assembler.add('2["after"]').data == ['after']


def test_invalid_reference():

    assembler = Assembler()
    assert assembler.add('51-[{"_placeholder":true,"num":3}]') is None

    with pytest.raises(binpacket.InvalidReference) as caught:
        assembler.add(b'blob')

    assert caught.value.packet.type == PacketType.BINARY_EVENT
    assert assembler.pending is None

    assert assembler.add('2[1]').data == [1]


def test_unused_attachments():

    frames = ['52-[{"_placeholder":true,"num":0}]', b'used', b'unused']

    with pytest.raises(binpacket.UnusedAttachments):
        feed(Assembler(unused='error'), frames)

    received = feed(Assembler(unused='warn'), frames)
    assert received.data == [b'used']
    assert received.attachments == [b'used', b'unused']


def test_malformed_text():

    assembler = Assembler()

    with pytest.raises(binpacket.MalformedPacket):
        assembler.add('5[no count]')

    assert assembler.pending is None


def test_cancel():

    assembler = Assembler()
    assert assembler.cancel() is None

    assembler.add('51-[{"_placeholder":true,"num":0}]')
    pending = assembler.cancel()

    assert pending.state is State.ERRORED
    assert assembler.pending is None
    assert assembler.state is State.AWAITING_SKELETON


def test_bad_frame_type():

    with pytest.raises(TypeError):
        Assembler().add(42)


def test_on_packet_complete():

    skeleton, attachments = binpacket.encode({'a': b'b'})
    assert binpacket.on_packet_complete(skeleton, attachments) == {'a': b'b'}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
