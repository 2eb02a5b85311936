"""Smart thermometer that receives its readings as UDP datagrams, blocking and asyncio."""